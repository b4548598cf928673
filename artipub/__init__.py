"""Publish build workspace artifacts to a binary repository."""

__version__ = "1.0.0"
