"""Focus Area: bounded code context around a cursor or selection."""

__version__ = "1.0.0"
