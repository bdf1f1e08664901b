"""Abstract base class for translation backends."""

from abc import ABC, abstractmethod


class AbstractTranslationBackend(ABC):
    """Abstract base class for text translation backends."""

    service_name: str = "unknown"

    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        """Translate text into the named target language.

        Args:
            text: Text to translate; empty text returns "" without a request
            target_language: Human-readable language name (e.g. "Spanish")

        Returns:
            Translated text, or "" if the service produced nothing

        Raises:
            TranslationError: If the service call fails for any reason
        """
        pass
