"""Slideshow and proof-of-play routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from imageservice.database import get_db
from imageservice.dependencies import get_event_publisher
from imageservice.errors import EntityNotFoundError, ImageNotInSlideshowError
from imageservice.schemas import (
    ImageRead,
    ProofOfPlayRead,
    SlideshowCreate,
    SlideshowRead,
)
from imageservice.services import proof_of_play as play_service
from imageservice.services import slideshows as slideshow_service
from imageservice.services.events import EventPublisher

router: APIRouter = APIRouter(prefix="/api", tags=["slideshows"])


@router.post("/addSlideshow", response_model=SlideshowRead)
async def add_slideshow(
    payload: SlideshowCreate,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
) -> SlideshowRead:
    """Add a slideshow together with its images."""
    try:
        slideshow = await slideshow_service.add_slideshow(db, events, payload)
    except slideshow_service.EmptySlideshowError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return SlideshowRead.model_validate(slideshow)


@router.delete(
    "/deleteSlideshow/{slideshow_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_slideshow(
    slideshow_id: int,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
) -> Response:
    if not await slideshow_service.delete_slideshow(db, events, slideshow_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Slideshow not found."
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/slideShow/{slideshow_id}/slideshowOrder", response_model=list[ImageRead])
async def slideshow_order(
    slideshow_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ImageRead] | JSONResponse:
    """Return the images of a slideshow in play order."""
    slideshow = await slideshow_service.get_slideshow(db, slideshow_id)
    if slideshow is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=[])
    return [ImageRead.model_validate(image) for image in slideshow.images]


@router.post(
    "/slideShow/{slideshow_id}/proof-of-play/{image_id}",
    response_model=ProofOfPlayRead,
)
async def add_proof_of_play(
    slideshow_id: int,
    image_id: int,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
) -> ProofOfPlayRead:
    """Record that an image of the slideshow has been played."""
    try:
        play = await play_service.record_play(db, events, slideshow_id, image_id)
    except EntityNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ImageNotInSlideshowError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return ProofOfPlayRead.model_validate(play)


@router.get(
    "/slideShow/{slideshow_id}/proof-of-play", response_model=list[ProofOfPlayRead]
)
async def slideshow_plays(
    slideshow_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ProofOfPlayRead]:
    if await slideshow_service.get_slideshow(db, slideshow_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Slideshow with ID {slideshow_id} not found.",
        )
    plays = await play_service.plays_for_slideshow(db, slideshow_id)
    return [ProofOfPlayRead.model_validate(play) for play in plays]
