"""Abstract base class for transcription backends."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class AbstractTranscriptionBackend(ABC):
    """Abstract base class for speech-to-text backends."""

    service_name: str = "unknown"

    @abstractmethod
    async def transcribe(self, audio_bytes: bytes, filename: str = "recording.wav") -> str:
        """Transcribe a complete audio file and return the recognized text.

        Args:
            audio_bytes: Full contents of the recorded audio file
            filename: File name sent with the upload; its extension tells
                      the service the container format

        Returns:
            Recognized text

        Raises:
            TranscriptionError: If the service call fails for any reason
        """
        pass
