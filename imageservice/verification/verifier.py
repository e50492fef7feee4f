"""Remote image URL verification.

Fetches a candidate URL, checks the declared content type against the
accepted MIME set and decodes the body with Pillow. The verdict is a plain
boolean: network faults and invalid images are both rejections, the reason
only shows up in the logs.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from io import BytesIO
from typing import Protocol

import httpx
from PIL import Image as PilImage

from imageservice.config import config
from imageservice.verification.connection import ImageConnection
from imageservice.verification.constants import (
    VERIFY_ACCEPTED_IMAGE_TYPES,
    VERIFY_REQUEST_HEADERS,
    VERIFY_THREAD_NAME_PREFIX,
)

logger = logging.getLogger("imageservice.verification")


class ImageSource(Protocol):
    """What the verification task needs from a connection handle."""

    url: str

    def connect(self) -> None: ...

    def header(self, name: str) -> str | None: ...

    def read_body(self) -> bytes: ...

    def close(self) -> None: ...


def is_accepted_content_type(content_type: str | None) -> bool:
    """Check a Content-Type header value against the accepted MIME set."""
    if not content_type:
        return False
    return content_type.strip().lower() in VERIFY_ACCEPTED_IMAGE_TYPES


def decode_image(content: bytes) -> bool:
    """Return True if ``content`` fully decodes as a raster image."""
    if not content:
        return False

    try:
        with PilImage.open(BytesIO(content)) as img:
            img.load()
            width, height = img.size
            return width > 0 and height > 0
    except Exception as exc:
        logger.debug("Failed to decode image: %s", exc)
        return False


def check_image_source(connection: ImageSource) -> bool:
    """Run the blocking verification against an unconnected handle.

    The handle is always closed before returning.
    """
    try:
        connection.connect()

        content_type = connection.header("content-type")
        if not is_accepted_content_type(content_type):
            logger.info(
                "Rejected %s: content type %r is not accepted",
                connection.url,
                content_type,
            )
            return False

        content = connection.read_body()
        is_valid = decode_image(content)
        if is_valid:
            logger.debug("Accepted %s (%d bytes)", connection.url, len(content))
        else:
            logger.info("Rejected %s: body is not a decodable image", connection.url)
        return is_valid
    except (httpx.HTTPError, OSError) as exc:
        logger.info("Rejected %s: %s: %s", connection.url, type(exc).__name__, exc)
        return False
    finally:
        connection.close()


class ImageVerifier:
    """Verifies candidate image URLs on a shared worker pool.

    Example:
        verifier = ImageVerifier()
        connection = verifier.create_connection("https://example.com/a.png")
        is_valid = verifier.is_valid_image_url(connection).result()
    """

    def __init__(
        self,
        *,
        connect_timeout_ms: int | None = None,
        read_timeout_ms: int | None = None,
        max_workers: int | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the verifier.

        Args:
            connect_timeout_ms: Connect timeout in milliseconds
            read_timeout_ms: Read timeout in milliseconds
            max_workers: Size of the verification thread pool
            headers: Extra headers sent with every request
            transport: Optional httpx transport shared by all connections
        """
        self.connect_timeout_ms = (
            config.VERIFY_CONNECT_TIMEOUT_MS
            if connect_timeout_ms is None
            else connect_timeout_ms
        )
        self.read_timeout_ms = (
            config.VERIFY_READ_TIMEOUT_MS if read_timeout_ms is None else read_timeout_ms
        )
        self.max_workers = config.VERIFY_MAX_WORKERS if max_workers is None else max_workers
        if self.connect_timeout_ms <= 0 or self.read_timeout_ms <= 0:
            raise ValueError("Verification timeouts must be positive")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self._headers = {**VERIFY_REQUEST_HEADERS, "User-Agent": config.VERIFY_USER_AGENT}
        if headers:
            self._headers.update(headers)
        self._transport = transport
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def create_connection(self, url: str) -> ImageConnection:
        """Create an unconnected GET handle for ``url``.

        Raises:
            ConnectionSetupError: if the URL is malformed or unsupported
        """
        return ImageConnection(
            url,
            connect_timeout=self.connect_timeout_ms / 1000,
            read_timeout=self.read_timeout_ms / 1000,
            headers=self._headers,
            transport=self._transport,
        )

    def is_valid_image_url(self, connection: ImageSource) -> Future[bool]:
        """Schedule verification of ``connection`` and return its future."""
        return self._get_executor().submit(check_image_source, connection)

    async def verify(self, url: str) -> bool:
        """Verify ``url`` without blocking the event loop.

        Connection setup errors are raised before anything is scheduled.
        """
        connection = self.create_connection(url)
        future = self.is_valid_image_url(connection)
        try:
            return await asyncio.wrap_future(future)
        except asyncio.CancelledError:
            # A running check closes its own connection; a queued one never will.
            if future.cancelled():
                connection.close()
            raise

    def shutdown(self, *, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix=VERIFY_THREAD_NAME_PREFIX,
                )
            return self._executor


__all__ = [
    "ImageSource",
    "ImageVerifier",
    "check_image_source",
    "decode_image",
    "is_accepted_content_type",
]
