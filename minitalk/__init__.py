"""Send text between processes one bit at a time over user signals."""

__version__ = "0.1.0"