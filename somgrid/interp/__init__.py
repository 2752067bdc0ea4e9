"""
Contains mapping, label aggregation and interpretation
utilities for trained Self-Organizing Maps.
"""
from .interp import *
from .mapping import *
from .metrics import *
