"""
Contains the Self-Organizing Map grid and its distance functions.
"""
from .distance import *
from .som import *
