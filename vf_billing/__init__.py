"""
Visiting faculty billing portal
"""

__version__ = '1.0.0'
