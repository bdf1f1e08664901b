"""Audio-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass
class AudioStats:
    """Audio recording statistics."""
    is_recording: bool
    duration_seconds: float
    sample_rate: int
    channels: int
    total_chunks: int
    peak_level: float = 0.0


@dataclass
class RecordingSession:
    """A single microphone recording and the file it produces."""
    session_id: str
    audio_path: Path
    is_active: bool = True
    started_at: datetime = field(default_factory=datetime.now)
    stopped_at: Optional[datetime] = None

    def mark_stopped(self) -> None:
        self.is_active = False
        self.stopped_at = datetime.now()
