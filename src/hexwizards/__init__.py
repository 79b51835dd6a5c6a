"""Hex Wizards: a turn-based hex-grid strategy simulation."""

__version__ = "0.1.0"
