"""Slideshow catalog operations."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from imageservice.models import Image, Slideshow
from imageservice.schemas import SlideshowCreate
from imageservice.services.events import EventPublisher


class EmptySlideshowError(ValueError):
    def __init__(self) -> None:
        super().__init__("Slideshow must contain images.")


async def add_slideshow(
    db: AsyncSession, events: EventPublisher, payload: SlideshowCreate
) -> Slideshow:
    """Persist a slideshow and its images in one transaction."""
    if not payload.images:
        raise EmptySlideshowError()

    slideshow = Slideshow(
        images=[
            Image(url=item.url.strip(), duration=item.duration)
            for item in payload.images
        ]
    )
    db.add(slideshow)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise

    events.publish(f"Slideshow added: {slideshow.id}")
    return slideshow


async def get_slideshow(db: AsyncSession, slideshow_id: int) -> Slideshow | None:
    return await db.get(Slideshow, slideshow_id)


async def delete_slideshow(
    db: AsyncSession, events: EventPublisher, slideshow_id: int
) -> bool:
    """Delete a slideshow together with its images and play records."""
    slideshow = await db.get(Slideshow, slideshow_id)
    if slideshow is None:
        return False

    await db.delete(slideshow)
    await db.commit()
    events.publish(f"Slideshow deleted: {slideshow_id}")
    return True
