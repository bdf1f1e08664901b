"""Orchestrator that sequences recording, transcription, translation and speech."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Set

from ..audio.capture import AudioCapture
from ..errors import CaptureError, TranscriptionError, TranslationError
from ..models.audio import AudioStats, RecordingSession
from ..models.events import UiStateChange
from ..models.transcription import TranscriptionResult
from ..models.translation import TranslationRequest, TranslationResult
from ..models.ui import UiState
from ..speech.languages import is_supported, language_code_for
from ..speech.manager import SpeechManager
from ..storage.file_manager import RecordingFileManager
from ..transcription.base import AbstractTranscriptionBackend
from ..translation.base import AbstractTranslationBackend
from .publisher import UiStatePublisher

logger = logging.getLogger(__name__)


class TranslatorOrchestrator:
    """Owns the UI state and turns user actions into service calls.

    Every action that talks to a remote service returns an ``asyncio.Task``
    the caller may await or cancel. Transcription and translation responses
    carry a request id; only the most recently issued request of each kind
    may write its field, older responses are dropped.

    Methods that submit tasks must be called from a running event loop, and
    the state is only mutated on that loop.
    """

    def __init__(self,
                 capture: AudioCapture,
                 file_manager: RecordingFileManager,
                 transcriber: AbstractTranscriptionBackend,
                 translator: AbstractTranslationBackend,
                 speech: SpeechManager,
                 publisher: Optional[UiStatePublisher] = None,
                 default_language: str = "English"):
        if not is_supported(default_language):
            raise ValueError(f"Unsupported language: {default_language}")

        self.capture = capture
        self.file_manager = file_manager
        self.transcriber = transcriber
        self.translator = translator
        self.speech = speech
        self.publisher = publisher

        self.state = UiState(selected_language=default_language)
        self.session: Optional[RecordingSession] = None

        self._transcription_request_id = 0
        self._translation_request_id = 0
        self._tasks: Set[asyncio.Task] = set()
        self._capture_stop: Optional[asyncio.Task] = None
        self._pending_recordings: Set[Path] = set()

        logger.info(f"Transcription: {transcriber.service_name}, translation: {translator.service_name}")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _set(self, **changes: Any) -> Dict[str, Any]:
        """Apply field changes and publish the ones that changed value."""
        changed = {}
        for name, value in changes.items():
            old_value = getattr(self.state, name)
            if old_value == value:
                continue
            setattr(self.state, name, value)
            changed[name] = value
            if self.publisher:
                self.publisher.publish_change(UiStateChange(field=name, old_value=old_value, new_value=value))
        return changed

    def _apply_transcript(self, text: str) -> None:
        # One-way: new transcript text replaces the input, edits never flow back
        if "transcribed_text" in self._set(transcribed_text=text):
            self._set(input_text=text)

    @property
    def pending_tasks(self) -> Set[asyncio.Task]:
        return set(self._tasks)

    def _submit(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    # ------------------------------------------------------------------
    # Recording and transcription
    # ------------------------------------------------------------------

    def toggle_recording(self) -> Optional[asyncio.Task]:
        """Start recording, or stop it and submit the transcription.

        Returns:
            The transcription task when recording was stopped, else None
        """
        if self.state.is_recording:
            return self._stop_recording()
        self._start_recording()
        return None

    @property
    def is_saving_recording(self) -> bool:
        """True while the previous recording is still being written to disk."""
        return self._capture_stop is not None and not self._capture_stop.done()

    def recording_stats(self) -> Optional[AudioStats]:
        """Live capture statistics, or None when not recording."""
        if not self.state.is_recording:
            return None
        return self.capture.get_recording_stats()

    def _start_recording(self) -> None:
        if self.is_saving_recording:
            logger.warning("Previous recording is still being saved")
            return

        logger.info("Start Recording")
        session_id = self.file_manager.new_session_id()
        audio_path = self.file_manager.allocate_recording_path(session_id)

        try:
            self.capture.start_recording(audio_path)
        except CaptureError as e:
            logger.error(f"Record error: {e}")
            return

        self.session = RecordingSession(session_id=session_id, audio_path=audio_path)
        self._set(is_recording=True)

    def _stop_recording(self) -> Optional[asyncio.Task]:
        logger.info("Stop Recording")
        session = self.session
        self._set(is_recording=False)

        # Joining the capture thread and writing the WAV file happen off the loop
        self._capture_stop = asyncio.get_running_loop().create_task(asyncio.to_thread(self._stop_capture))

        if session is None:
            return None
        session.mark_stopped()
        self._pending_recordings.add(session.audio_path)

        self._transcription_request_id += 1
        return self._submit(self._run_transcription(session, self._transcription_request_id, self._capture_stop))

    def _stop_capture(self) -> None:
        try:
            self.capture.stop_recording()
        except CaptureError as e:
            logger.error(f"Record error: {e}")

    def _discard_recording(self, path: Path) -> None:
        self.file_manager.discard(path)
        self._pending_recordings.discard(path)

    async def _run_transcription(self,
                                 session: RecordingSession,
                                 request_id: int,
                                 capture_stop: asyncio.Task) -> TranscriptionResult:
        self._set(is_transcribing=True)
        start_time = time.monotonic()
        try:
            await asyncio.shield(capture_stop)
            try:
                audio_bytes = await asyncio.to_thread(session.audio_path.read_bytes)
                text = await self.transcriber.transcribe(audio_bytes, filename=session.audio_path.name)
                result = TranscriptionResult(request_id=request_id, text=text)
            except OSError as e:
                logger.error(f"Could not read recording {session.audio_path}: {e}")
                result = TranscriptionResult(request_id=request_id, error_message=f"Could not read recording: {e}")
            except TranscriptionError as e:
                logger.error(f"Transcription error: {e}")
                result = TranscriptionResult(request_id=request_id, error_message=e.message)

            result.session_id = session.session_id
            result.processing_time = time.monotonic() - start_time

            if request_id != self._transcription_request_id:
                logger.debug(f"Discarding stale transcription #{request_id}")
                return result

            self._apply_transcript(result.display_text)
            logger.info(f"Transcription #{request_id} applied in {result.processing_time:.2f}s")
            return result
        finally:
            if request_id == self._transcription_request_id:
                self._set(is_transcribing=False)
            # A file still being written is left for shutdown() to remove
            if capture_stop.done():
                self._discard_recording(session.audio_path)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, text: Optional[str] = None, target_language: Optional[str] = None) -> Optional[asyncio.Task]:
        """Submit a translation of ``text`` (default: the input field).

        Returns:
            The translation task, or None if there is nothing to translate
        """
        text = self.state.input_text if text is None else text
        target_language = target_language or self.state.selected_language

        if not text:
            logger.debug("Nothing to translate")
            return None

        self._translation_request_id += 1
        request = TranslationRequest(
            source_text=text,
            target_language=target_language,
            request_id=self._translation_request_id,
        )
        self._set(is_processing=True)
        return self._submit(self._run_translation(request))

    async def _run_translation(self, request: TranslationRequest) -> Optional[TranslationResult]:
        start_time = time.monotonic()
        try:
            translated = await self.translator.translate(request.source_text, request.target_language)
        except TranslationError as e:
            logger.error(f"Translation Error: {e}")
            return None
        else:
            result = TranslationResult(
                translated_text=translated,
                request_id=request.request_id,
                target_language=request.target_language,
                processing_time=time.monotonic() - start_time,
            )
            if request.request_id == self._translation_request_id:
                self._set(translated_text=translated)
                logger.info(f"Translation #{request.request_id} applied in {result.processing_time:.2f}s")
            else:
                logger.debug(f"Discarding stale translation #{request.request_id}")
            return result
        finally:
            if request.request_id == self._translation_request_id:
                self._set(is_processing=False)

    # ------------------------------------------------------------------
    # Speech and user edits
    # ------------------------------------------------------------------

    def listen(self, language: Optional[str] = None) -> bool:
        """Speak the translated text.

        Returns:
            False without doing anything when there is no translated text
        """
        if not self.state.translated_text:
            return False

        language_code = language_code_for(language or self.state.selected_language)
        self.speech.speak(self.state.translated_text, language_code)
        return True

    def set_input_text(self, text: str) -> None:
        self._set(input_text=text)

    def select_language(self, name: str) -> None:
        if not is_supported(name):
            raise ValueError(f"Unsupported language: {name}")
        self._set(selected_language=name)

    def copy_translation(self) -> str:
        """Text to place on the clipboard."""
        return self.state.translated_text

    async def shutdown(self) -> None:
        """Cancel outstanding work, remove unprocessed recordings and release the devices."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        if self._capture_stop is not None:
            await self._capture_stop

        if self.state.is_recording:
            self._set(is_recording=False)
            self._stop_capture()
            if self.session:
                self._pending_recordings.add(self.session.audio_path)

        # Includes recordings whose transcription was cancelled before it started
        for path in list(self._pending_recordings):
            self._discard_recording(path)
        self.file_manager.cleanup()

        self.speech.stop()
        logger.info("Orchestrator shut down")
