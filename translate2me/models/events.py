"""Event models published on the UI state topic."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

UI_STATE_TOPIC = "ui.state"


@dataclass
class UiStateChange:
    """One field of the UI state changed value."""
    field: str
    old_value: Any
    new_value: Any
    timestamp: datetime = field(default_factory=datetime.now)
