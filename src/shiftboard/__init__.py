"""Shiftboard: shift allocation engine for a small team roster."""

__version__ = "0.1.0"
