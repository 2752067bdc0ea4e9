"""
This module contains project-wide utilities, tensor helpers and error types.
"""
from .errors import *
from .tensor import *
from .utils import *
