"""Domain event publishing."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger("imageservice.events")

EventHandler = Callable[[str], None]


class EventPublisher:
    """In-process publisher for catalog notifications.

    Events are plain messages such as ``"Image added: 3"``. Every event is
    logged; subscribers are called synchronously in registration order and a
    failing subscriber never fails the publishing request.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` and return a callable that removes it."""
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return _unsubscribe

    def publish(self, message: str) -> None:
        logger.info("%s", message)
        for handler in list(self._handlers):
            try:
                handler(message)
            except Exception:
                logger.exception("Event handler %r failed for %r", handler, message)


__all__ = ["EventHandler", "EventPublisher"]
