"""Terminal user interface."""

from .console_screen import ConsoleScreen, parse_command

__all__ = [
    "ConsoleScreen",
    "parse_command",
]
