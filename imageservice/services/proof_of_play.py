"""Proof-of-play recording and lookup."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from imageservice.errors import EntityNotFoundError, ImageNotInSlideshowError
from imageservice.models import Image, ProofOfPlay, Slideshow
from imageservice.services.events import EventPublisher


async def record_play(
    db: AsyncSession,
    events: EventPublisher,
    slideshow_id: int,
    image_id: int,
) -> ProofOfPlay:
    """Record that ``image_id`` was shown as part of ``slideshow_id``.

    Raises:
        EntityNotFoundError: slideshow or image does not exist
        ImageNotInSlideshowError: the image belongs to another slideshow
        IntegrityError: the play was already recorded
    """
    slideshow = await db.get(Slideshow, slideshow_id)
    if slideshow is None:
        raise EntityNotFoundError("Slideshow", slideshow_id)

    image = await db.get(Image, image_id)
    if image is None:
        raise EntityNotFoundError("Image", image_id)

    if image.slideshow_id != slideshow.id:
        raise ImageNotInSlideshowError(image_id, slideshow_id)

    play = ProofOfPlay(slideshow_id=slideshow.id, image_id=image.id)
    db.add(play)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise

    events.publish(
        f"Proof of Play recorded: Slideshow ID {slideshow_id}, Image ID {image_id}"
    )
    return play


async def plays_for_slideshow(db: AsyncSession, slideshow_id: int) -> list[ProofOfPlay]:
    result = await db.execute(
        select(ProofOfPlay)
        .where(ProofOfPlay.slideshow_id == slideshow_id)
        .order_by(ProofOfPlay.played_at, ProofOfPlay.id)
    )
    return list(result.scalars())


async def plays_for_image(db: AsyncSession, image_id: int) -> list[ProofOfPlay]:
    result = await db.execute(
        select(ProofOfPlay)
        .where(ProofOfPlay.image_id == image_id)
        .order_by(ProofOfPlay.played_at, ProofOfPlay.id)
    )
    return list(result.scalars())
