"""Remote image URL verification."""

from __future__ import annotations

from .connection import ConnectionSetupError, ImageConnection, validate_image_url
from .verifier import (
    ImageSource,
    ImageVerifier,
    check_image_source,
    decode_image,
    is_accepted_content_type,
)

__all__ = [
    "ConnectionSetupError",
    "ImageConnection",
    "ImageSource",
    "ImageVerifier",
    "check_image_source",
    "decode_image",
    "is_accepted_content_type",
    "validate_image_url",
]
