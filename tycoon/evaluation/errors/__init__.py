"""
Export errors from all modules defined in this package.
"""

# pylint:disable=W0401

from .distribution import *
from .investment import *
