"""Filtering, formatting and rotation logic."""
