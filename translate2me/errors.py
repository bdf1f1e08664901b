"""Error kinds raised by Translate2Me components."""


class Translate2MeError(Exception):
    """Base class for all Translate2Me errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CaptureError(Translate2MeError):
    """Microphone capture could not be started or completed."""


class TranscriptionError(Translate2MeError):
    """The transcription service call failed."""


class TranslationError(Translate2MeError):
    """The translation service call failed."""
