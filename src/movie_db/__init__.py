"""Movie list and poster loaders with a time-invalidated local cache."""

__version__ = "0.1.0"
