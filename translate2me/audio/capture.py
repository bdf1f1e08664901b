"""Audio capture module recording one microphone session into a WAV file."""

import pyaudio
import wave
import logging
from pathlib import Path
from threading import Thread, Event, Lock
from typing import Optional, List
from datetime import datetime
import numpy as np

from ..errors import CaptureError
from ..models.audio import AudioStats


logger = logging.getLogger(__name__)


class AudioCapture:
    """Microphone recorder with start/stop semantics producing a single audio file."""

    def __init__(
        self,
        sample_rate: int = 16000,
        chunk_size: int = 1024,
        channels: int = 1,
        format: int = pyaudio.paInt16,
    ):
        """Initialize audio capture with specified parameters.

        Args:
            sample_rate: Audio sample rate (16kHz for Whisper compatibility)
            chunk_size: Size of each audio chunk in samples
            channels: Number of audio channels (1 for mono)
            format: Audio format (16-bit signed int)
        """
        self.sample_rate = sample_rate
        self.chunk_size = chunk_size
        self.channels = channels
        self.format = format

        # Recording thread management
        self.recording_thread: Optional[Thread] = None
        self.stop_event = Event()
        self.is_recording = False

        # Current session
        self.audio_path: Optional[Path] = None
        self.audio_data: List[bytes] = []
        self._data_lock = Lock()

        # Statistics tracking
        self.start_time: Optional[datetime] = None
        self.total_chunks = 0
        self.peak_level = 0.0

        # PyAudio instance
        self.pyaudio_instance: Optional[pyaudio.PyAudio] = None
        self.stream = None

    def start_recording(self, audio_path: Path) -> None:
        """Open the microphone and start recording in a background thread.

        Args:
            audio_path: File the recording is written to on stop

        Raises:
            CaptureError: If the input device cannot be opened
        """
        if self.is_recording:
            logger.warning("Recording already in progress")
            return

        logger.info(f"Starting audio recording to {audio_path}")
        self.stream = self.__open_audio_stream()

        self.audio_path = Path(audio_path)
        self.stop_event.clear()
        self.start_time = datetime.now()
        self.total_chunks = 0
        self.peak_level = 0.0
        with self._data_lock:
            self.audio_data = []

        self.recording_thread = Thread(target=self._record_continuously, daemon=True)
        self.recording_thread.name = "AudioCaptureThread"
        self.recording_thread.start()
        self.is_recording = True

    def stop_recording(self) -> Optional[Path]:
        """Stop recording and write the audio file.

        Returns:
            Path of the completed recording, or None if nothing was recording

        Raises:
            CaptureError: If the audio file cannot be written
        """
        if not self.is_recording:
            logger.warning("No recording in progress")
            return None

        logger.info("Stopping audio recording")
        self.stop_event.set()

        if self.recording_thread and self.recording_thread.is_alive():
            self.recording_thread.join(timeout=2.0)
            if self.recording_thread.is_alive():
                logger.warning("Recording thread did not stop cleanly")

        self.is_recording = False
        logger.info(f"Recording stopped. Total chunks: {self.total_chunks}")

        self.save_to_file(self.audio_path)
        return self.audio_path

    def __open_audio_stream(self):
        try:
            self.pyaudio_instance = pyaudio.PyAudio()
            stream = self.pyaudio_instance.open(
                format=self.format,
                channels=self.channels,
                rate=self.sample_rate,
                input=True,
                frames_per_buffer=self.chunk_size,
                stream_callback=None
            )
        except Exception as e:
            self.__release_audio()
            raise CaptureError(f"Could not open microphone: {e}") from e

        logger.info(f"Audio stream opened: {self.sample_rate}Hz, "
                    f"{self.chunk_size} samples/chunk")
        return stream

    def __read_audio_chunk(self) -> bytes:
        audio_chunk = self.stream.read(self.chunk_size, exception_on_overflow=False)
        self.total_chunks += 1
        self.__update_peak_level(audio_chunk)
        return audio_chunk

    def __update_peak_level(self, audio_chunk: bytes) -> None:
        samples = np.frombuffer(audio_chunk, dtype=np.int16)
        if samples.size:
            level = float(np.max(np.abs(samples.astype(np.int32)))) / 32768.0
            self.peak_level = max(self.peak_level, level)

    def __release_audio(self) -> None:
        if self.stream is not None:
            try:
                self.stream.stop_stream()
                self.stream.close()
            except Exception as e:
                logger.warning(f"Error closing audio stream: {e}")
            self.stream = None
        if self.pyaudio_instance is not None:
            self.pyaudio_instance.terminate()
            self.pyaudio_instance = None

    def _record_continuously(self) -> None:
        """Internal method: continuous recording loop in background thread."""
        try:
            while not self.stop_event.is_set():
                audio_chunk = self.__read_audio_chunk()
                with self._data_lock:
                    self.audio_data.append(audio_chunk)
        except Exception as e:
            logger.error(f"Record error: {e}")
        finally:
            self.__release_audio()

    def save_to_file(self, filepath: Path) -> None:
        """Save recorded audio to WAV file.

        Args:
            filepath: Path to save the WAV file
        """
        with self._data_lock:
            chunks = list(self.audio_data)

        if not chunks:
            logger.warning("No audio data captured; writing empty recording")

        try:
            with wave.open(str(filepath), 'wb') as wf:
                wf.setnchannels(self.channels)
                wf.setsampwidth(pyaudio.get_sample_size(self.format))
                wf.setframerate(self.sample_rate)
                for chunk in chunks:
                    wf.writeframes(chunk)
        except (OSError, wave.Error) as e:
            raise CaptureError(f"Could not write recording {filepath}: {e}") from e

        logger.info(f"Audio saved to {filepath} ({len(chunks)} chunks)")

    def get_audio_data_size(self) -> int:
        with self._data_lock:
            return sum(len(chunk) for chunk in self.audio_data)

    def get_recording_stats(self) -> AudioStats:
        """Get current recording statistics."""
        duration = 0.0
        if self.start_time:
            duration = (datetime.now() - self.start_time).total_seconds()

        return AudioStats(
            is_recording=self.is_recording,
            duration_seconds=duration,
            sample_rate=self.sample_rate,
            channels=self.channels,
            total_chunks=self.total_chunks,
            peak_level=self.peak_level,
        )

    def __del__(self):
        """Ensure resources are cleaned up on deletion."""
        if self.is_recording:
            self.stop_event.set()
