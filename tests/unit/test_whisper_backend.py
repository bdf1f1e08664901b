"""Unit tests for WhisperTranscriptionBackend against a local fake server."""

import asyncio
import pytest
from aiohttp import test_utils

from conftest import FakeOpenAI
from translate2me.errors import TranscriptionError
from translate2me.transcription.whisper_backend import WhisperTranscriptionBackend


async def _transcribe(fake: FakeOpenAI, audio: bytes, filename: str = "recording.wav"):
    async with test_utils.TestServer(fake.app) as server:
        backend = WhisperTranscriptionBackend(api_key="sk-test", base_url=str(server.make_url("/v1")))
        return await backend.transcribe(audio, filename=filename)


@pytest.mark.unit
class TestWhisperTranscriptionBackend:
    """Test cases for the Whisper transcription client."""

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            WhisperTranscriptionBackend(api_key="")

    def test_url_built_from_base_url(self):
        backend = WhisperTranscriptionBackend(api_key="sk-test", base_url="https://example.test/v1/")

        assert backend.url == "https://example.test/v1/audio/transcriptions"

    def test_transcribe_uploads_whole_file(self):
        fake = FakeOpenAI(transcript=" Hello there. ")
        audio = b"RIFF" + b"\x01" * 5000

        text = asyncio.run(_transcribe(fake, audio, filename="recording_1.wav"))

        assert text == "Hello there."
        assert len(fake.requests) == 1
        request = fake.requests[0]
        assert request["audio"] == audio
        assert request["filename"] == "recording_1.wav"
        assert request["model"] == "whisper-1"
        assert request["auth"] == "Bearer sk-test"

    def test_service_error_raises(self):
        fake = FakeOpenAI(status=401)

        with pytest.raises(TranscriptionError, match="401"):
            asyncio.run(_transcribe(fake, b"audio"))

    def test_connection_failure_raises(self):
        backend = WhisperTranscriptionBackend(api_key="sk-test", base_url="http://127.0.0.1:1/v1")

        with pytest.raises(TranscriptionError, match="request failed"):
            asyncio.run(backend.transcribe(b"audio"))

    def test_error_message_is_readable(self):
        fake = FakeOpenAI(status=500)

        with pytest.raises(TranscriptionError) as excinfo:
            asyncio.run(_transcribe(fake, b"audio"))

        assert excinfo.value.message
        assert "invalid api key" in excinfo.value.message
