"""Services layer for Translate2Me application logic."""

from .orchestrator import TranslatorOrchestrator
from .publisher import UiStatePublisher

__all__ = [
    "TranslatorOrchestrator",
    "UiStatePublisher",
]
