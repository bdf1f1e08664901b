"""Translation module for Translate2Me."""

from .base import AbstractTranslationBackend
from .chatgpt_translator import ChatGPTTranslator, SYSTEM_PROMPT

__all__ = [
    "AbstractTranslationBackend",
    "ChatGPTTranslator",
    "SYSTEM_PROMPT",
]
