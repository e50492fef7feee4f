"""initial_schema

Revision ID: 20250301_01
Revises:
Create Date: 2025-03-01 10:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250301_01"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "slideshows",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_slideshows")),
    )
    op.create_index(op.f("ix_slideshows_id"), "slideshows", ["id"], unique=False)

    op.create_table(
        "images",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("slideshow_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["slideshow_id"],
            ["slideshows.id"],
            name=op.f("fk_images_slideshow_id_slideshows"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_images")),
        sa.UniqueConstraint("url", name=op.f("uq_images_url")),
    )
    op.create_index(op.f("ix_images_id"), "images", ["id"], unique=False)
    op.create_index(
        op.f("ix_images_created_at"), "images", ["created_at"], unique=False
    )
    op.create_index(
        op.f("ix_images_slideshow_id"), "images", ["slideshow_id"], unique=False
    )

    op.create_table(
        "proof_of_play",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("slideshow_id", sa.Integer(), nullable=False),
        sa.Column("image_id", sa.Integer(), nullable=False),
        sa.Column("played_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["slideshow_id"],
            ["slideshows.id"],
            name=op.f("fk_proof_of_play_slideshow_id_slideshows"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["image_id"],
            ["images.id"],
            name=op.f("fk_proof_of_play_image_id_images"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_proof_of_play")),
        sa.UniqueConstraint("slideshow_id", "image_id", name="uq_proof_of_play"),
    )
    op.create_index(
        op.f("ix_proof_of_play_id"), "proof_of_play", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_proof_of_play_slideshow_id"),
        "proof_of_play",
        ["slideshow_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_proof_of_play_image_id"),
        "proof_of_play",
        ["image_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_proof_of_play_played_at"),
        "proof_of_play",
        ["played_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_proof_of_play_played_at"), table_name="proof_of_play")
    op.drop_index(op.f("ix_proof_of_play_image_id"), table_name="proof_of_play")
    op.drop_index(op.f("ix_proof_of_play_slideshow_id"), table_name="proof_of_play")
    op.drop_index(op.f("ix_proof_of_play_id"), table_name="proof_of_play")
    op.drop_table("proof_of_play")
    op.drop_index(op.f("ix_images_slideshow_id"), table_name="images")
    op.drop_index(op.f("ix_images_created_at"), table_name="images")
    op.drop_index(op.f("ix_images_id"), table_name="images")
    op.drop_table("images")
    op.drop_index(op.f("ix_slideshows_id"), table_name="slideshows")
    op.drop_table("slideshows")
