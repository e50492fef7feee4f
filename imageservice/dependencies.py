"""Shared FastAPI dependencies."""

from __future__ import annotations

from imageservice.services.events import EventPublisher
from imageservice.verification import ImageVerifier

_verifier: ImageVerifier | None = None
_events: EventPublisher | None = None


def get_image_verifier() -> ImageVerifier:
    """Return the process-wide verifier (one shared worker pool)."""
    global _verifier
    if _verifier is None:
        _verifier = ImageVerifier()
    return _verifier


def get_event_publisher() -> EventPublisher:
    global _events
    if _events is None:
        _events = EventPublisher()
    return _events


def shutdown_verifier() -> None:
    """Stop the verifier's worker pool; a new one is created on next use."""
    global _verifier
    if _verifier is not None:
        _verifier.shutdown(wait=False)
        _verifier = None
