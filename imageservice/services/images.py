"""Image catalog operations."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from imageservice.models import Image, Slideshow
from imageservice.schemas import ImageCreate
from imageservice.services.events import EventPublisher
from imageservice.verification import ImageVerifier

logger = logging.getLogger(__name__)


async def add_image(
    db: AsyncSession,
    verifier: ImageVerifier,
    events: EventPublisher,
    payload: ImageCreate,
) -> Image | None:
    """Verify the image URL and persist the image.

    Returns None when the URL does not point at a valid image. A malformed
    URL raises ``ConnectionSetupError`` before anything is fetched.
    """
    is_valid = await verifier.verify(payload.url)
    if not is_valid:
        return None

    image = Image(url=payload.url.strip(), duration=payload.duration)
    db.add(image)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise

    events.publish(f"Image added: {image.id}")
    return image


async def delete_image(db: AsyncSession, events: EventPublisher, image_id: int) -> bool:
    """Delete an image and its proof-of-play records."""
    image = await db.get(Image, image_id)
    if image is None:
        return False

    await db.delete(image)
    await db.commit()
    events.publish(f"Image deleted: {image_id}")
    return True


async def search_images(
    db: AsyncSession, query: str, duration: int | None = None
) -> list[Image]:
    """Find images whose URL contains ``query``.

    A ``duration`` of None or 0 matches every duration.
    """
    stmt = select(Image).where(Image.url.contains(query, autoescape=True))
    if duration:
        stmt = stmt.where(Image.duration == duration)
    result = await db.execute(stmt.order_by(Image.id))
    return list(result.scalars())


async def slideshows_containing_image(
    db: AsyncSession, image_id: int
) -> list[Slideshow]:
    result = await db.execute(
        select(Slideshow)
        .join(Slideshow.images)
        .where(Image.id == image_id)
        .order_by(Slideshow.id)
    )
    return list(result.scalars().unique())
