"""Supervised task runner for file-watching guards."""

__version__ = "0.1.0"
