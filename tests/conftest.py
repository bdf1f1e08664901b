"""Pytest configuration and fixtures for Translate2Me tests."""

import pytest
import time
import tempfile
import logging
from pathlib import Path
from unittest.mock import Mock, patch
import numpy as np
from aiohttp import web

from translate2me.errors import CaptureError
from translate2me.models.audio import AudioStats
from translate2me.speech.engine import SpeechEngine
from translate2me.speech.manager import SpeechManager
from translate2me.storage.file_manager import RecordingFileManager
from translate2me.transcription.base import AbstractTranscriptionBackend
from translate2me.translation.base import AbstractTranslationBackend


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def sample_audio_chunk():
    """Generate a sample audio chunk for testing."""
    # Generate 1024 samples of 16-bit audio (sine wave)
    sample_rate = 16000
    duration = 1024 / sample_rate  # ~0.064 seconds
    freq = 440  # A4 note

    t = np.linspace(0, duration, 1024, False)
    wave_data = np.sin(2 * np.pi * freq * t)

    # Convert to 16-bit integers
    audio_data = (wave_data * 32767).astype(np.int16)
    return audio_data.tobytes()


@pytest.fixture
def mock_pyaudio():
    """Mock PyAudio for testing without actual audio hardware."""
    with patch('pyaudio.PyAudio') as mock_pyaudio_class:
        mock_pyaudio_instance = Mock()
        mock_stream = Mock()

        # Configure mock stream; reads block briefly like a real device
        mock_stream.read_data = b'\x00' * 2048  # Silent audio

        def read(*args, **kwargs):
            time.sleep(0.002)
            return mock_stream.read_data

        mock_stream.read.side_effect = read
        mock_stream.stop_stream.return_value = None
        mock_stream.close.return_value = None

        # Configure mock PyAudio instance
        mock_pyaudio_instance.open.return_value = mock_stream
        mock_pyaudio_instance.terminate.return_value = None

        mock_pyaudio_class.return_value = mock_pyaudio_instance

        yield {
            'class': mock_pyaudio_class,
            'instance': mock_pyaudio_instance,
            'stream': mock_stream
        }


class FakeAudioCapture:
    """Stands in for AudioCapture; writes fixed bytes to the session file on stop."""

    def __init__(self, audio_bytes: bytes = b"RIFF-fake-recording", fail_start: bool = False):
        self.audio_bytes = audio_bytes
        self.fail_start = fail_start
        self.is_recording = False
        self.audio_path = None
        self.started_paths = []
        self.stop_calls = 0

    def start_recording(self, audio_path):
        if self.fail_start:
            raise CaptureError("Could not open microphone: no device")
        self.audio_path = Path(audio_path)
        self.started_paths.append(self.audio_path)
        self.is_recording = True

    def stop_recording(self):
        self.stop_calls += 1
        if not self.is_recording:
            return None
        self.is_recording = False
        self.audio_path.write_bytes(self.audio_bytes)
        return self.audio_path

    def get_recording_stats(self):
        return AudioStats(is_recording=self.is_recording, duration_seconds=2.5, sample_rate=16000,
                          channels=1, total_chunks=40, peak_level=0.25)


class FakeTranscriptionBackend(AbstractTranscriptionBackend):
    """Returns a fixed transcript, or raises the configured error."""

    service_name = "fake"

    def __init__(self, text: str = "hello world", error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    async def transcribe(self, audio_bytes: bytes, filename: str = "recording.wav") -> str:
        self.calls.append((audio_bytes, filename))
        if self.error:
            raise self.error
        return self.text


class FakeTranslationBackend(AbstractTranslationBackend):
    """Echoes the text tagged with the language; ``gates`` hold responses back per text."""

    service_name = "fake"

    def __init__(self, error: Exception = None):
        self.error = error
        self.requests = []
        self.gates = {}

    async def translate(self, text: str, target_language: str) -> str:
        self.requests.append((text, target_language))
        gate = self.gates.get(text)
        if gate is not None:
            await gate.wait()
        if self.error:
            raise self.error
        return f"[{target_language}] {text}"


class FakeSpeechEngine(SpeechEngine):
    """Records utterances; playback ends only when finish() is called."""

    def __init__(self):
        self.started = []
        self.stop_calls = 0
        self._on_done = None

    def start(self, utterance, on_done):
        self.started.append(utterance)
        self._on_done = on_done

    def stop(self):
        self.stop_calls += 1
        self.finish()

    def finish(self):
        if self._on_done is not None:
            on_done, self._on_done = self._on_done, None
            on_done()


class StateRecorder:
    """Collects published UI state changes."""

    def __init__(self):
        self.changes = []

    def on_change(self, change):
        self.changes.append(change)

    def fields(self):
        return [c.field for c in self.changes]


class FakeOpenAI:
    """Minimal OpenAI-compatible HTTP server for the transcription and chat endpoints."""

    def __init__(self, transcript: str = "hello world", translation: str = "hola mundo",
                 status: int = 200, choices: bool = True):
        self.transcript = transcript
        self.translation = translation
        self.status = status
        self.choices = choices
        self.requests = []

        self.app = web.Application()
        self.app.router.add_post("/v1/audio/transcriptions", self.transcriptions)
        self.app.router.add_post("/v1/chat/completions", self.chat_completions)

    async def transcriptions(self, request):
        form = await request.post()
        upload = form["file"]
        self.requests.append({
            "endpoint": "transcriptions",
            "auth": request.headers.get("Authorization"),
            "model": form["model"],
            "filename": upload.filename,
            "audio": upload.file.read(),
        })
        if self.status != 200:
            return web.Response(status=self.status, text="invalid api key")
        return web.json_response({"text": self.transcript})

    async def chat_completions(self, request):
        body = await request.json()
        self.requests.append({
            "endpoint": "chat",
            "auth": request.headers.get("Authorization"),
            "body": body,
        })
        if self.status != 200:
            return web.Response(status=self.status, text="rate limited")
        choices = []
        if self.choices:
            choices.append({"index": 0, "message": {"role": "assistant", "content": self.translation}})
        return web.json_response({"id": "chatcmpl-test", "choices": choices})


@pytest.fixture
def file_manager(temp_data_dir):
    return RecordingFileManager(temp_data_dir)


@pytest.fixture
def fake_capture():
    return FakeAudioCapture()


@pytest.fixture
def fake_transcriber():
    return FakeTranscriptionBackend()


@pytest.fixture
def fake_translator():
    return FakeTranslationBackend()


@pytest.fixture
def fake_speech_engine():
    return FakeSpeechEngine()


@pytest.fixture
def speech_manager(fake_speech_engine):
    return SpeechManager(fake_speech_engine)
