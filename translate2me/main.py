"""Main application entry point for Translate2Me."""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import Optional

from translate2me.audio.capture import AudioCapture
from translate2me.services.orchestrator import TranslatorOrchestrator
from translate2me.services.publisher import UiStatePublisher
from translate2me.speech.engine import Pyttsx3SpeechEngine
from translate2me.speech.manager import SpeechManager
from translate2me.storage.file_manager import RecordingFileManager
from translate2me.transcription.whisper_backend import WhisperTranscriptionBackend
from translate2me.translation.chatgpt_translator import ChatGPTTranslator
from translate2me.ui.console_screen import ConsoleScreen

from .config import Translate2MeConfig

logger = logging.getLogger(__name__)


class App:

    def __init__(self, config_path: Optional[str], log_level: Optional[str] = None):
        self.config = Translate2MeConfig(config_path)
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level)
        self.orchestrator: Optional[TranslatorOrchestrator] = None
        self.screen: Optional[ConsoleScreen] = None

    def init(self) -> None:
        logger.info("Initializing services...")
        api_key = self.config.get_openai_api_key()
        base_url = self.config.get('openai.base_url')
        timeout = self.config.get('openai.request_timeout_seconds', 60)

        sample_rate = self.config.get('audio.sample_rate', 16000)
        chunk_size = self.config.get('audio.chunk_size', 1024)
        channels = self.config.get('audio.channels', 1)
        logger.info(f"Audio settings: {sample_rate}Hz, {chunk_size} samples/chunk, {channels} channels")

        capture = AudioCapture(sample_rate=sample_rate, chunk_size=chunk_size, channels=channels)
        file_manager = RecordingFileManager(
            recordings_dir=self.config.get_recordings_directory(),
            keep_recordings=self.config.get('audio.keep_recordings', False),
        )
        transcriber = WhisperTranscriptionBackend(
            api_key=api_key,
            model=self.config.get('openai.transcription_model'),
            base_url=base_url,
            timeout_seconds=timeout,
        )
        translator = ChatGPTTranslator(
            api_key=api_key,
            model=self.config.get('openai.translation_model'),
            temperature=self.config.get('openai.temperature', 0.2),
            base_url=base_url,
            timeout_seconds=timeout,
        )
        speech = SpeechManager(
            Pyttsx3SpeechEngine(),
            rate=self.config.get('speech.rate', 0.5),
            pitch=self.config.get('speech.pitch', 1.0),
        )
        publisher = UiStatePublisher()

        self.orchestrator = TranslatorOrchestrator(
            capture=capture,
            file_manager=file_manager,
            transcriber=transcriber,
            translator=translator,
            speech=speech,
            publisher=publisher,
            default_language=self.config.get('ui.default_language', 'English'),
        )
        self.screen = ConsoleScreen(self.orchestrator, publisher)

    async def run(self) -> None:
        try:
            await self.screen.run()
        finally:
            await self.orchestrator.shutdown()


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/translate2me.log')
    console_output = config.get('logging.console_output', True)

    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("Translate2Me application starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def main() -> None:
    """Main entry point for Translate2Me application."""
    parser = argparse.ArgumentParser(
        description="Translate2Me - speak, translate, listen",
        epilog="Commands: r=record/stop, e=edit, l=language, t=translate, s=listen, c=copy, q=quit"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, else INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Translate2Me v0.1.0"
    )

    args = parser.parse_args()

    try:
        app = App(args.config, args.log_level)
        app.init()
        asyncio.run(app.run())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logging.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
