"""A turn-based terminal dungeon crawler with generated levels and event-driven systems."""

__version__ = "0.1.0"