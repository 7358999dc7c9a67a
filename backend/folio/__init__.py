"""
Folio - persistence core for a hierarchical note store.
"""

__version__ = "1.0.0"
