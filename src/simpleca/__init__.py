"""SimpleCA - a small private certificate authority service."""

__version__ = "1.0.0"
