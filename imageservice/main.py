"""Main FastAPI application."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from imageservice import __version__
from imageservice.config import config
from imageservice.database import init_db
from imageservice.dependencies import shutdown_verifier
from imageservice.errors import register_exception_handlers
from imageservice.logging_config import configure_logging
from imageservice.routes import images, slideshows


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan manager."""
    # Startup
    await init_db()
    try:
        yield
    finally:
        # Shutdown
        shutdown_verifier()


configure_logging(debug=config.DEBUG)


app = FastAPI(
    title="Image Service",
    description="Images, slideshows and proof-of-play records",
    version=__version__,
    lifespan=lifespan,
)
register_exception_handlers(app)


access_logger = logging.getLogger("imageservice.access")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests similar to the access log."""

    response = await call_next(request)
    client_host = "-"
    if request.client is not None:
        client_host = request.client.host or "-"

    access_logger.info(
        '%s - "%s %s" %s',
        client_host,
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


# Health check endpoint
@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(images.router)
app.include_router(slideshows.router)
