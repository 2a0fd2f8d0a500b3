"""Workout description parsing and normalization."""

__version__ = "0.1.0"
