"""
This module contains dataset utilities.
"""
from .datasets import *
