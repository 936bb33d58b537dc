"""Virtual herbal garden backend: remedy chat, plant identification and garden layout."""

__version__ = "1.0.0"
