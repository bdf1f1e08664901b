"""Speech manager: cancel-then-speak over a synthesis engine."""

import logging
from enum import Enum
from threading import Lock

from .engine import SpeechEngine, Utterance

logger = logging.getLogger(__name__)


class SpeechState(Enum):
    IDLE = "idle"
    SPEAKING = "speaking"


class SpeechManager:
    """Plays at most one utterance at a time; a new request pre-empts the current one."""

    def __init__(self, engine: SpeechEngine, rate: float = 0.5, pitch: float = 1.0):
        """Initialize speech manager.

        Args:
            engine: Synthesis engine that plays utterances
            rate: Speaking rate on a 0.0-1.0 scale, fixed for every utterance
            pitch: Pitch multiplier, fixed for every utterance
        """
        self.engine = engine
        self.rate = rate
        self.pitch = pitch
        self._state = SpeechState.IDLE
        self._utterance_id = 0
        self._lock = Lock()

    @property
    def state(self) -> SpeechState:
        with self._lock:
            return self._state

    @property
    def is_speaking(self) -> bool:
        return self.state is SpeechState.SPEAKING

    def speak(self, text: str, language_code: str) -> None:
        """Stop any current speech, then speak ``text`` with a voice for ``language_code``."""
        if not text:
            logger.debug("Nothing to speak")
            return

        if self.is_speaking:
            logger.info("Stopping current speech")
            self.engine.stop()

        with self._lock:
            self._utterance_id += 1
            utterance_id = self._utterance_id
            self._state = SpeechState.SPEAKING

        utterance = Utterance(text=text, language_code=language_code, rate=self.rate, pitch=self.pitch)
        logger.info(f"Speaking {len(text)} chars in {language_code}")
        self.engine.start(utterance, on_done=lambda: self._on_finished(utterance_id))

    def stop(self) -> None:
        """Stop any current speech."""
        if self.is_speaking:
            self.engine.stop()
        with self._lock:
            self._state = SpeechState.IDLE

    def _on_finished(self, utterance_id: int) -> None:
        with self._lock:
            # A newer utterance owns the state once it has started
            if utterance_id == self._utterance_id:
                self._state = SpeechState.IDLE
