"""codevault — Discord bot that stores, lists and encodes base64 codes per user."""

__version__ = "0.1.0"
