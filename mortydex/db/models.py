"""SQLAlchemy ORM models for the favorites row store."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def _new_favorite_id() -> str:
    return str(uuid.uuid4())


class FavoriteCharacter(Base):
    """A character a user has marked as a favorite.

    Character fields are a snapshot taken when the favorite was added; rows
    are created and deleted but never updated.
    """

    __tablename__ = "favorite_characters"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "character_id",
            name="uq_favorite_characters_user_character",
        ),
        Index("ix_favorite_characters_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_favorite_id)
    user_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        doc=(
            "Opaque identifier issued by the identity provider. Stored as a"
            " string so that UUIDs and OAuth subjects fit without conversion."
        ),
    )
    character_id: Mapped[int] = mapped_column(Integer, nullable=False)
    character_name: Mapped[str] = mapped_column(String(255), nullable=False)
    character_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    character_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    character_species: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


__all__ = ["Base", "FavoriteCharacter", "utcnow"]
