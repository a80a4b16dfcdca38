"""Demonstration client for the JSONPlaceholder REST resource service."""

__version__ = "0.1.0"
