"""Synthetic load generators for the GitHub Git data API."""

__version__ = "0.1.0"
