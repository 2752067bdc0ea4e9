"""
Contains SOM grid training, mapping and interpretation modules and dataset utilities.
"""
from .core import *
from .datasets import *
from .interp import *
from .learn import *
from .log import *
from .som import *
