"""Terminal screen for Translate2Me."""

import asyncio
import logging
from typing import Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.events import UiStateChange
from ..services.orchestrator import TranslatorOrchestrator
from ..services.publisher import UiStatePublisher
from ..speech.languages import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

COMMANDS = [
    ("r", "Record / stop"),
    ("e <text>", "Edit input text"),
    ("l <language>", "Choose target language"),
    ("t", "Translate"),
    ("s", "Listen"),
    ("c", "Copy translation"),
    ("v", "Show screen"),
    ("q", "Quit"),
]

# Fields worth a one-line notice when they change behind the prompt
NOTIFY_FIELDS = {"transcribed_text", "translated_text", "is_transcribing", "is_processing"}


def parse_command(line: str) -> Tuple[str, str]:
    """Split an input line into a lowercase command and its argument."""
    line = line.strip()
    if not line:
        return "", ""
    command, _, argument = line.partition(" ")
    return command.lower(), argument.strip()


class ConsoleScreen:
    """Line-based screen bound to the orchestrator's UI state."""

    def __init__(self,
                 orchestrator: TranslatorOrchestrator,
                 publisher: Optional[UiStatePublisher] = None,
                 console: Optional[Console] = None):
        self.orchestrator = orchestrator
        self.publisher = publisher
        self.console = console or Console()
        self.running = False

        if self.publisher:
            self.publisher.subscribe(self.on_state_change)

    def on_state_change(self, change: UiStateChange) -> None:
        """Print a notice for changes that finish in the background."""
        if change.field not in NOTIFY_FIELDS:
            return
        if change.field == "is_transcribing":
            self.console.print("📝 Transcribing..." if change.new_value else "📝 Transcription done", style="blue")
        elif change.field == "is_processing":
            self.console.print("🌐 Translating..." if change.new_value else "🌐 Translation done", style="blue")
        elif change.field == "transcribed_text":
            self.console.print(f"Input: {change.new_value}")
        elif change.field == "translated_text":
            self.console.print(Text(f"Result: {change.new_value}", style="bold green"))

    def _format_stats(self) -> str:
        stats = self.orchestrator.recording_stats()
        if stats is None:
            return ""
        return f"{stats.duration_seconds:.1f}s  level {stats.peak_level:.0%}"

    def show_status(self) -> None:
        """Render the whole screen."""
        state = self.orchestrator.state
        self.console.print("🌍 Translate2Me", style="bold blue")

        if state.is_recording:
            self.console.print(f"🔴 Listening... {self._format_stats()}", style="bold red")
        else:
            self.console.print("🎙️  Tap to Speak (r)", style="bold")

        table = Table(show_header=False, box=None)
        table.add_row("Target language", state.selected_language)
        table.add_row("Input", state.input_text or "[dim](empty)[/dim]")
        table.add_row("Translate", "⏳ processing" if state.is_processing else ("ready" if state.can_translate else "[dim]disabled[/dim]"))
        if state.is_transcribing:
            table.add_row("Transcription", "⏳ in progress")
        self.console.print(table)

        if state.translated_text:
            self.console.print(Panel(state.translated_text, title="Result", border_style="green"))

        commands = "  ".join(f"[bold]{key}[/bold] {label}" for key, label in COMMANDS)
        self.console.print(commands)
        self.console.print(f"Languages: {', '.join(SUPPORTED_LANGUAGES)}", style="dim")

    def handle_command(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the user asked to quit
        """
        command, argument = parse_command(line)
        logger.debug(f"Command: '{command}' argument: '{argument}'")

        if command == "q":
            return False
        if command in ("", "v"):
            self.show_status()
        elif command == "r":
            was_recording = self.orchestrator.state.is_recording
            self.orchestrator.toggle_recording()
            if self.orchestrator.state.is_recording:
                self.console.print("🔴 Listening... (r to stop)", style="bold red")
            elif not was_recording:
                self.console.print("❌ Recording did not start", style="red")
        elif command == "e":
            self.orchestrator.set_input_text(argument)
        elif command == "l":
            language = argument.capitalize()
            try:
                self.orchestrator.select_language(language)
                self.console.print(f"Target language: {language}")
            except ValueError:
                self.console.print(f"Choose one of: {', '.join(SUPPORTED_LANGUAGES)}", style="yellow")
        elif command == "t":
            if self.orchestrator.state.is_processing:
                self.console.print("Translation already in progress", style="yellow")
            elif self.orchestrator.translate() is None:
                self.console.print("Nothing to translate", style="yellow")
        elif command == "s":
            if not self.orchestrator.listen():
                self.console.print("Nothing to listen to yet", style="yellow")
        elif command == "c":
            text = self.orchestrator.copy_translation()
            if text:
                self.console.print(text, soft_wrap=True, highlight=False)
            else:
                self.console.print("Nothing to copy", style="yellow")
        else:
            self.console.print(f"Unknown command: {command}", style="yellow")
        return True

    async def run(self) -> None:
        """Read commands until the user quits or input ends."""
        self.running = True
        self.show_status()
        try:
            while self.running:
                try:
                    line = await asyncio.to_thread(self.console.input, "> ")
                except EOFError:
                    break
                if not self.handle_command(line):
                    break
        finally:
            self.running = False
            if self.publisher:
                self.publisher.unsubscribe(self.on_state_change)
