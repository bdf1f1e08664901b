"""Speech synthesis engines used by the speech manager."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from threading import Event, Thread, Lock
from typing import Callable, Optional

import pyttsx3

logger = logging.getLogger(__name__)


@dataclass
class Utterance:
    """A single unit of text submitted for synthesis."""
    text: str
    language_code: str
    rate: float = 0.5
    pitch: float = 1.0


class SpeechEngine(ABC):
    """Plays utterances without blocking the caller."""

    @abstractmethod
    def start(self, utterance: Utterance, on_done: Callable[[], None]) -> None:
        """Begin playing an utterance; ``on_done`` runs when playback ends or is stopped."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the current utterance; returns without waiting for playback to end."""
        pass


class Pyttsx3SpeechEngine(SpeechEngine):
    """On-device synthesis with pyttsx3, one playback thread per utterance.

    pyttsx3 hands out one shared engine per driver, so each playback thread
    waits for the previous one before touching it.
    """

    def __init__(self, driver_name: Optional[str] = None):
        self.driver_name = driver_name
        self._engine = None
        self._thread: Optional[Thread] = None
        self._cancelled: Optional[Event] = None
        self._lock = Lock()

    def start(self, utterance: Utterance, on_done: Callable[[], None]) -> None:
        cancelled = Event()
        previous = self._thread
        with self._lock:
            self._cancelled = cancelled

        self._thread = Thread(target=self._speak, args=(utterance, on_done, cancelled, previous), daemon=True)
        self._thread.name = "SpeechThread"
        self._thread.start()

    def stop(self) -> None:
        with self._lock:
            engine = self._engine
            if self._cancelled is not None:
                self._cancelled.set()
        if engine is not None:
            engine.stop()

    def _speak(self,
               utterance: Utterance,
               on_done: Callable[[], None],
               cancelled: Event,
               previous: Optional[Thread]) -> None:
        try:
            if previous is not None:
                previous.join()
            if cancelled.is_set():
                logger.debug("Utterance cancelled before playback")
                return

            engine = pyttsx3.init(self.driver_name)
            with self._lock:
                self._engine = engine

            voice_id = select_voice(engine.getProperty('voices'), utterance.language_code)
            if voice_id:
                engine.setProperty('voice', voice_id)
            else:
                logger.info(f"No voice for {utterance.language_code}, using default voice")

            # 0.0-1.0 scale where 0.5 is the driver's normal speaking rate
            base_rate = engine.getProperty('rate')
            engine.setProperty('rate', int(base_rate * utterance.rate * 2))
            # pyttsx3 exposes no pitch property; 1.0 is the driver default

            if cancelled.is_set():
                return
            engine.say(utterance.text)
            engine.runAndWait()
        except Exception as e:
            logger.error(f"Speech synthesis error: {e}")
        finally:
            with self._lock:
                self._engine = None
            on_done()


def _normalize(code: str) -> str:
    return code.lstrip('\x05').strip().lower().replace('_', '-')


def select_voice(voices, language_code: str) -> Optional[str]:
    """Pick the id of the voice best matching a locale code.

    An exact locale match wins over a match on the language part alone.
    Returns None when nothing matches.
    """
    wanted = _normalize(language_code)
    wanted_language = wanted.split('-')[0]
    partial_match = None

    for voice in voices or []:
        codes = []
        for lang in getattr(voice, 'languages', None) or []:
            if isinstance(lang, bytes):
                lang = lang.decode('utf-8', errors='ignore')
            codes.append(_normalize(str(lang)))

        if wanted in codes:
            return voice.id
        if partial_match is None and any(c.split('-')[0] == wanted_language for c in codes):
            partial_match = voice.id

    return partial_match
