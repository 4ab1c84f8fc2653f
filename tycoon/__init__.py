"""
Startup Tycoon: a classroom peer-evaluation game.
"""

__version__ = '1.2.0'
