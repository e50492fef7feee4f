"""Catalog services (safe from async request handlers)."""

from __future__ import annotations

from . import images, proof_of_play, slideshows
from .events import EventPublisher

__all__ = ["EventPublisher", "images", "proof_of_play", "slideshows"]
