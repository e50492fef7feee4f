"""Logging configuration helpers for the image service."""

from __future__ import annotations

import logging
import os
from typing import Final


_DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ACCESS_FORMAT: Final[str] = '%(client_addr)s - "%(request_line)s" %(status_code)s'
_DEFAULT_DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Verification logs every rejected URL; it gets its own level knob.
_VERIFICATION_LOGGER: Final[str] = "imageservice.verification"


def _resolve_level(level_name: str | None, fallback: int = logging.INFO) -> int:
    """Translate a log level string or number into a logging level."""

    if not level_name:
        return fallback

    value = level_name.strip()
    if value.isdigit():
        return int(value)

    numeric = getattr(logging, value.upper(), None)
    if isinstance(numeric, int):
        return numeric

    return fallback


def _attach_stream_handler(
    name: str,
    level: int,
    *,
    fmt: str,
    datefmt: str | None,
) -> logging.Logger:
    target = logging.getLogger(name)
    if not target.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt, datefmt))
        target.addHandler(handler)
    target.setLevel(level)
    target.propagate = False
    return target


def configure_logging(*, debug: bool = False) -> None:
    """Stream service, verification and access logs to the console.

    ``LOG_LEVEL`` overrides the service level, ``VERIFY_LOG_LEVEL`` the
    level of the image URL verifier (defaults to the service level).
    """

    default_level = logging.DEBUG if debug else logging.INFO
    level = _resolve_level(os.getenv("LOG_LEVEL"), default_level)

    _attach_stream_handler(
        "imageservice", level, fmt=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT
    )

    # Child logger: shares the parent's handler, only the level differs.
    logging.getLogger(_VERIFICATION_LOGGER).setLevel(
        _resolve_level(os.getenv("VERIFY_LOG_LEVEL"), level)
    )

    # uvicorn access lines stay at INFO or above.
    _attach_stream_handler(
        "uvicorn.access",
        max(level, logging.INFO),
        fmt=_ACCESS_FORMAT,
        datefmt=None,
    )
