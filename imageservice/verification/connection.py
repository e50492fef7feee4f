"""Blocking HTTP connection handle used by the image URL verifier."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlparse

import httpx

from imageservice.verification.constants import VERIFY_ALLOWED_SCHEMES


class ConnectionSetupError(ValueError):
    """Raised when a connection handle cannot be created for a URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to create connection: {reason}")
        self.url = url
        self.reason = reason


def validate_image_url(url: str) -> tuple[bool, str | None]:
    """Validate a candidate image URL and return status with reason.

    Args:
        url: URL to validate

    Returns:
        Tuple of (is_valid, reason_if_invalid)
    """
    if not url or not url.strip():
        return False, "URL is empty"

    try:
        parsed = urlparse(url.strip())
    except ValueError as exc:
        return False, f"Malformed URL: {exc}"

    if parsed.scheme.lower() not in VERIFY_ALLOWED_SCHEMES:
        return False, f"Invalid scheme: {parsed.scheme or '<none>'}"

    if not parsed.netloc:
        return False, "Missing host"

    return True, None


class ImageConnection:
    """A single-use GET handle to a remote image.

    Creating the handle performs no network I/O. ``connect()`` sends the
    request and keeps the response open as a stream so headers can be
    inspected before the body is downloaded. ``close()`` releases both the
    response and the underlying client and is safe to call more than once.
    """

    method = "GET"

    def __init__(
        self,
        url: str,
        *,
        connect_timeout: float,
        read_timeout: float,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Build the client and request for ``url``.

        Args:
            url: Absolute http(s) URL
            connect_timeout: Connect timeout in seconds
            read_timeout: Read timeout in seconds (also used for write/pool)
            headers: Extra request headers
            transport: Optional httpx transport, mainly for tests
        """
        ok, reason = validate_image_url(url)
        if not ok:
            raise ConnectionSetupError(url, reason or "invalid URL")

        self.url = url.strip()
        self.timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self._client = httpx.Client(
            timeout=self.timeout,
            headers=dict(headers or {}),
            follow_redirects=True,
            transport=transport,
        )
        try:
            self._request = self._client.build_request(self.method, self.url)
        except (httpx.InvalidURL, ValueError) as exc:
            self._client.close()
            raise ConnectionSetupError(url, str(exc)) from exc
        self._response: httpx.Response | None = None
        self._closed = False

    @property
    def connected(self) -> bool:
        return self._response is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self) -> None:
        """Send the request; the body stays unread until ``read_body()``."""
        if self._closed:
            raise RuntimeError("connection is closed")
        if self._response is None:
            self._response = self._client.send(self._request, stream=True)

    def header(self, name: str) -> str | None:
        return self._require_response().headers.get(name)

    def read_body(self) -> bytes:
        """Read the body of a successful response.

        Raises:
            httpx.HTTPStatusError: for 4xx and 5xx replies, before any body
                bytes are downloaded
        """
        response = self._require_response()
        response.raise_for_status()
        return response.read()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._response is not None:
                self._response.close()
        finally:
            self._client.close()

    def _require_response(self) -> httpx.Response:
        if self._response is None:
            raise RuntimeError("connect() must be called before reading the response")
        return self._response

    def __repr__(self) -> str:
        state = "closed" if self._closed else "connected" if self.connected else "idle"
        return f"<ImageConnection {self.method} {self.url} ({state})>"


__all__ = ["ConnectionSetupError", "ImageConnection", "validate_image_url"]
