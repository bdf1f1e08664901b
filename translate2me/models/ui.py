"""UI-related data models."""

from dataclasses import dataclass, fields
from typing import Any, Dict

TRANSCRIPT_PLACEHOLDER = "Your text will appear here..."


@dataclass
class UiState:
    """Observable state bound by the user interface."""
    is_recording: bool = False
    is_transcribing: bool = False
    is_processing: bool = False
    transcribed_text: str = TRANSCRIPT_PLACEHOLDER
    input_text: str = ""
    translated_text: str = ""
    selected_language: str = "English"

    @property
    def can_translate(self) -> bool:
        return bool(self.input_text) and not self.is_processing

    @property
    def can_listen(self) -> bool:
        return bool(self.translated_text)

    def snapshot(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
