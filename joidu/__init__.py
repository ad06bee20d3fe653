"""Joidu - ADHD-friendly focus companion core."""

__version__ = "0.1.0"
