"""FX rate board: mid, bid and ask quotes for a selected base currency."""

__version__ = "0.1.0"
