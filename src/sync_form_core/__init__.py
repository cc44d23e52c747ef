"""Core model and algorithms of the sync job form."""

__version__ = "0.1.0"
