"""Target languages offered by the picker and their synthesis locale codes."""

from typing import Dict, List

SUPPORTED_LANGUAGES: List[str] = ["English", "Chinese", "Spanish", "Japanese", "Korean", "French"]

DEFAULT_LANGUAGE_CODE = "en-US"

LANGUAGE_CODES: Dict[str, str] = {
    "Spanish": "es-ES",
    "French": "fr-FR",
    "Japanese": "ja-JP",
    "Korean": "ko-KR",
    "Chinese": "zh-CN",
}


def language_code_for(name: str) -> str:
    """Map a language name to a locale code, falling back to en-US."""
    return LANGUAGE_CODES.get(name, DEFAULT_LANGUAGE_CODE)


def is_supported(name: str) -> bool:
    return name in SUPPORTED_LANGUAGES
