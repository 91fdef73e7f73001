"""Eisenhower - prioritize tasks across boards of four quadrants."""

__version__ = "0.1.0"
