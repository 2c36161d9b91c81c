"""Task list with live due-date countdowns."""

__version__ = "0.1.0"
