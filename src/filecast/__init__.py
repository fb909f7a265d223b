"""Filecast: fuzzy search and directory navigation for a personal launcher."""

__version__ = "0.1.0"
