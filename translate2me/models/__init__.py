"""Data models for the Translate2Me application."""

from .audio import AudioStats, RecordingSession
from .transcription import TranscriptionResult
from .translation import TranslationRequest, TranslationResult
from .ui import UiState, TRANSCRIPT_PLACEHOLDER
from .events import UiStateChange, UI_STATE_TOPIC

__all__ = [
    "AudioStats",
    "RecordingSession",
    "TranscriptionResult",
    "TranslationRequest",
    "TranslationResult",
    "UiState",
    "TRANSCRIPT_PLACEHOLDER",
    "UiStateChange",
    "UI_STATE_TOPIC",
]
