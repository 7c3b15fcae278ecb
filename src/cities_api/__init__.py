"""Cities API: import cities and find them by id or by distance."""

__version__ = "0.1.0"
