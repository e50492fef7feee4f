"""Slideshow model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from imageservice.models.base import Base

if TYPE_CHECKING:
    from imageservice.models.image import Image
    from imageservice.models.proof_of_play import ProofOfPlay


class Slideshow(Base):
    """An ordered group of images.

    Images are played in insertion order (ascending image id). Removing an
    image from the collection, or deleting the slideshow, deletes the image.
    """

    __tablename__ = "slideshows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC)
    )

    images: Mapped[list[Image]] = relationship(
        "Image",
        back_populates="slideshow",
        cascade="all, delete-orphan",
        order_by="Image.id",
        lazy="selectin",
    )
    plays: Mapped[list[ProofOfPlay]] = relationship(
        "ProofOfPlay", back_populates="slideshow", cascade="all, delete-orphan"
    )
