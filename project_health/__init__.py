"""Project health and duration engine."""

__version__ = "0.1.0"
