"""Parse EVE Online clipboard text into structured item lists."""

__version__ = "0.1.0"