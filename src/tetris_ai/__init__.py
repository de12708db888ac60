"""Falling-block puzzle engine with a search-based AI player."""

__version__ = "0.1.0"
