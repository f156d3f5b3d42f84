"""Lock screen TSP re-initialization service for Samsung Galaxy A02 (Magisk)."""

__version__ = "1.0.0"
