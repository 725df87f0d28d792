"""Swap form engine: token catalog, amount validation, quotes and form synchronization."""

__version__ = "0.1.0"
