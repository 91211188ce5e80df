"""
This package contains spring functions, that define the spring
constants between nodes of *Elastic network models*, and a factory for
creating them by name.
"""

__name__ = "springlaws"
__version__ = "0.1.0"
__author__ = "The springlaws contributors"
__all__ = []


from .errors import *
from .factory import *
from .pairs import *
from .spring import *
