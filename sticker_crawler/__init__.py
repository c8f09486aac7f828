"""LINE STORE sticker crawler."""

__version__ = "0.1.0"
