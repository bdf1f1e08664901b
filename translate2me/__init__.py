"""Translate2Me - speak, transcribe, translate and listen."""

__version__ = "0.1.0"
