"""Image model."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from imageservice.models.base import Base

if TYPE_CHECKING:
    from imageservice.models.proof_of_play import ProofOfPlay
    from imageservice.models.slideshow import Slideshow


class Image(Base):
    """A remote image shown for ``duration`` seconds."""

    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    url: Mapped[str] = mapped_column(String(2048), unique=True, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), index=True
    )

    slideshow_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("slideshows.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    slideshow: Mapped[Slideshow | None] = relationship(
        "Slideshow", back_populates="images"
    )
    plays: Mapped[list[ProofOfPlay]] = relationship(
        "ProofOfPlay", back_populates="image", cascade="all, delete-orphan"
    )
