"""Proof-of-play model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from imageservice.models.base import Base

if TYPE_CHECKING:
    from imageservice.models.image import Image
    from imageservice.models.slideshow import Slideshow


class ProofOfPlay(Base):
    """Record of an image having been displayed within a slideshow."""

    __tablename__ = "proof_of_play"
    __table_args__ = (
        UniqueConstraint("slideshow_id", "image_id", name="uq_proof_of_play"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    slideshow_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("slideshows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("images.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    played_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), index=True
    )

    slideshow: Mapped[Slideshow] = relationship("Slideshow", back_populates="plays")
    image: Mapped[Image] = relationship("Image", back_populates="plays")
