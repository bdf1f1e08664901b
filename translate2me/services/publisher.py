"""UI state publisher module for pub/sub event publishing."""

import logging
from typing import Callable
from pubsub import pub

from ..models.events import UiStateChange, UI_STATE_TOPIC

logger = logging.getLogger(__name__)


class UiStatePublisher:
    """Publishes UI state changes using pubsub.pub so views can observe them."""

    def __init__(self, topic: str = UI_STATE_TOPIC):
        """Initialize UI state publisher.

        Args:
            topic: Pub/sub topic name for state changes
        """
        self.topic = topic
        logger.info(f"UiStatePublisher initialized with topic: {topic}")

    def publish_change(self, change: UiStateChange) -> None:
        """Publish a state change to the pub/sub topic.

        Args:
            change: UiStateChange to publish
        """
        pub.sendMessage(self.topic, change=change)
        logger.debug(f"Published state change: {change.field}")

    def subscribe(self, listener: Callable[[UiStateChange], None]) -> None:
        """Register a listener called with ``change=`` for every published change."""
        pub.subscribe(listener, self.topic)

    def unsubscribe(self, listener: Callable[[UiStateChange], None]) -> None:
        pub.unsubscribe(listener, self.topic)
