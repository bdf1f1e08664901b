"""Translation-related data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class TranslationRequest:
    """A single translate action."""
    source_text: str
    target_language: str
    request_id: int


@dataclass
class TranslationResult:
    """Translated text for one request."""
    translated_text: str
    request_id: int
    target_language: str
    processing_time: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
