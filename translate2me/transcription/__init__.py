"""Transcription module for Translate2Me."""

from .base import AbstractTranscriptionBackend
from .whisper_backend import WhisperTranscriptionBackend

__all__ = [
    "AbstractTranscriptionBackend",
    "WhisperTranscriptionBackend",
]
