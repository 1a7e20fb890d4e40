"""Pathé ticket sale monitor."""

__version__ = "0.1.0"
