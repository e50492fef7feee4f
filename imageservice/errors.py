"""Catalog exceptions and their HTTP mapping."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound

logger = logging.getLogger("imageservice.errors")


class EntityNotFoundError(LookupError):
    """A referenced catalog entity does not exist."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} with ID {entity_id} not found.")
        self.entity = entity
        self.entity_id = entity_id


class ImageNotInSlideshowError(ValueError):
    """An image was referenced through a slideshow it does not belong to."""

    def __init__(self, image_id: int, slideshow_id: int) -> None:
        super().__init__(
            f"Image ID {image_id} is not part of Slideshow ID {slideshow_id}"
        )
        self.image_id = image_id
        self.slideshow_id = slideshow_id


def _error(status_code: int, prefix: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": f"{prefix}: {exc}"})


async def handle_bad_request(_: Request, exc: Exception) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "Bad Request", exc)


async def handle_not_found(_: Request, exc: Exception) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Not Found", exc)


async def handle_conflict(request: Request, exc: Exception) -> JSONResponse:
    logger.info("Integrity error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflict: the record violates a uniqueness constraint."},
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error", exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and persistence errors onto HTTP responses."""
    app.add_exception_handler(ValueError, handle_bad_request)
    app.add_exception_handler(EntityNotFoundError, handle_not_found)
    app.add_exception_handler(NoResultFound, handle_not_found)
    app.add_exception_handler(IntegrityError, handle_conflict)
    app.add_exception_handler(Exception, handle_unexpected)
