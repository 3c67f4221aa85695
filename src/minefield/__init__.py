"""Minefield: hazard-clearing grid puzzle engine."""

__version__ = "0.1.0"
