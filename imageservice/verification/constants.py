"""Image URL verification constants.

All verifier configuration in one place for consistency.
"""

from __future__ import annotations

# Worker pool
VERIFY_THREAD_NAME_PREFIX = "image-verify"

# HTTP headers for verification requests
VERIFY_REQUEST_HEADERS = {
    "Accept": "image/*",
}

# Accepted MIME types (compared against the lowercased Content-Type header)
VERIFY_ACCEPTED_IMAGE_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/webp",
        "image/gif",
    }
)

# Supported URL schemes
VERIFY_ALLOWED_SCHEMES = frozenset({"http", "https"})

__all__ = [
    "VERIFY_ACCEPTED_IMAGE_TYPES",
    "VERIFY_ALLOWED_SCHEMES",
    "VERIFY_REQUEST_HEADERS",
    "VERIFY_THREAD_NAME_PREFIX",
]
