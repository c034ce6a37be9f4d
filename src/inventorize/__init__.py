"""Inventorize: file inventory builder and integrity checker."""

__version__ = "0.1.0"
