"""Tube Times arrivals display."""

__version__ = "0.1.0"
