"""Transcription-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class TranscriptionResult:
    """Outcome of one transcription attempt.

    Exactly one of ``text`` and ``error_message`` is set.
    """
    request_id: int
    text: Optional[str] = None
    error_message: Optional[str] = None
    processing_time: float = 0.0
    session_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.error_message is None

    @property
    def display_text(self) -> str:
        """Text shown in the transcript and input fields."""
        if self.ok:
            return self.text or ""
        return f"Error: {self.error_message}"
