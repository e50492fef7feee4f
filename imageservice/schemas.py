"""Pydantic schemas for the catalog API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ImageCreate(BaseModel):
    url: str = Field(..., min_length=1, max_length=2048)
    duration: int = Field(..., ge=1, description="Display time in seconds")


class SlideshowCreate(BaseModel):
    images: list[ImageCreate] | None = None


class ImageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    duration: int
    created_at: datetime
    slideshow_id: int | None = None


class SlideshowRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    images: list[ImageRead] = Field(default_factory=list)


class SlideshowSummary(BaseModel):
    """Slideshow without its images."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


class ProofOfPlayRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slideshow_id: int
    image_id: int
    played_at: datetime
