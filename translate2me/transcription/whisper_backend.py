"""OpenAI Whisper transcription backend."""

import asyncio
import logging
import aiohttp

from .base import AbstractTranscriptionBackend
from ..errors import TranscriptionError

logger = logging.getLogger(__name__)


class WhisperTranscriptionBackend(AbstractTranscriptionBackend):
    """Uploads a recording to the OpenAI audio transcriptions endpoint."""

    service_name = "OpenAI Whisper"

    def __init__(self,
                 api_key: str,
                 model: str = "whisper-1",
                 base_url: str = "https://api.openai.com/v1",
                 timeout_seconds: float = 60.0):
        """Initialize Whisper backend.

        Args:
            api_key: OpenAI API key
            model: Transcription model identifier
            base_url: API root, without trailing slash
            timeout_seconds: Total time allowed for one request
        """
        if not api_key:
            raise ValueError("OpenAI API key is required")
        self.api_key = api_key
        self.model = model
        self.url = f"{base_url.rstrip('/')}/audio/transcriptions"
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

        logger.info(f"WhisperTranscriptionBackend initialized with model: {model}")

    async def transcribe(self, audio_bytes: bytes, filename: str = "recording.wav") -> str:
        headers = {"Authorization": f"Bearer {self.api_key}"}

        form = aiohttp.FormData()
        form.add_field("model", self.model)
        form.add_field("file", audio_bytes, filename=filename, content_type="application/octet-stream")

        logger.info(f"Sending file: {filename} ({len(audio_bytes)} bytes)")

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.url, headers=headers, data=form) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise TranscriptionError(f"Transcription API error: {response.status} - {error_text}")
                    result = await response.json()
        except aiohttp.ClientError as e:
            raise TranscriptionError(f"Transcription request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TranscriptionError("Transcription request timed out") from e
        except ValueError as e:
            raise TranscriptionError(f"Transcription API returned invalid JSON: {e}") from e

        text = result.get("text") if isinstance(result, dict) else None
        if text is None:
            raise TranscriptionError("Transcription API returned no text")

        logger.debug(f"Transcription received: '{text[:50]}'")
        return text.strip()
