"""Switch terminal color schemes automatically based on the current directory."""

__version__ = "0.1.0"