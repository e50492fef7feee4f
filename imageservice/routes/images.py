"""Image routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from imageservice.database import get_db
from imageservice.dependencies import get_event_publisher, get_image_verifier
from imageservice.schemas import (
    ImageCreate,
    ImageRead,
    ProofOfPlayRead,
    SlideshowSummary,
)
from imageservice.services import images as image_service
from imageservice.services import proof_of_play as play_service
from imageservice.services.events import EventPublisher
from imageservice.verification import ImageVerifier

router: APIRouter = APIRouter(prefix="/api", tags=["images"])

INVALID_IMAGE_URL = "Invalid image URL. The URL does not contain a valid image."


@router.post("/addImage", response_model=ImageRead)
async def add_image(
    payload: ImageCreate,
    db: AsyncSession = Depends(get_db),
    verifier: ImageVerifier = Depends(get_image_verifier),
    events: EventPublisher = Depends(get_event_publisher),
) -> ImageRead:
    """Add an image after verifying that its URL serves a real image."""
    image = await image_service.add_image(db, verifier, events, payload)
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_IMAGE_URL
        )
    return ImageRead.model_validate(image)


@router.delete("/deleteImage/{image_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    image_id: int,
    db: AsyncSession = Depends(get_db),
    events: EventPublisher = Depends(get_event_publisher),
) -> Response:
    if not await image_service.delete_image(db, events, image_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Image not found."
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/images/search", response_model=list[ImageRead])
async def search_images(
    query: str = Query(..., max_length=2048),
    duration: int | None = Query(default=None, ge=0),
    db: AsyncSession = Depends(get_db),
) -> list[ImageRead]:
    """Search images by URL fragment and optional exact duration."""
    images = await image_service.search_images(db, query, duration)
    return [ImageRead.model_validate(image) for image in images]


@router.get("/images/{image_id}/slideshows", response_model=list[SlideshowSummary])
async def image_slideshows(
    image_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[SlideshowSummary]:
    slideshows = await image_service.slideshows_containing_image(db, image_id)
    return [SlideshowSummary.model_validate(item) for item in slideshows]


@router.get("/images/{image_id}/proof-of-play", response_model=list[ProofOfPlayRead])
async def image_plays(
    image_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ProofOfPlayRead]:
    plays = await play_service.plays_for_image(db, image_id)
    return [ProofOfPlayRead.model_validate(play) for play in plays]
