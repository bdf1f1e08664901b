"""On-device text-to-speech."""

from .engine import SpeechEngine, Pyttsx3SpeechEngine, Utterance, select_voice
from .manager import SpeechManager, SpeechState
from .languages import SUPPORTED_LANGUAGES, LANGUAGE_CODES, DEFAULT_LANGUAGE_CODE, language_code_for, is_supported

__all__ = [
    "SpeechEngine",
    "Pyttsx3SpeechEngine",
    "Utterance",
    "select_voice",
    "SpeechManager",
    "SpeechState",
    "SUPPORTED_LANGUAGES",
    "LANGUAGE_CODES",
    "DEFAULT_LANGUAGE_CODE",
    "language_code_for",
    "is_supported",
]
