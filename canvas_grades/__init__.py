"""Weighted gradebook parsing and goal solving."""

__version__ = "0.1.0"
