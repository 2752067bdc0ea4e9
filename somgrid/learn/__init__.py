"""
Contains the SOM training loop and the engine facade.
"""
from .callbacks import *
from .learn import *
