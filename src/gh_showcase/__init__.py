"""Curate GitHub repositories into a featured-projects snapshot."""

__version__ = "0.1.0"
