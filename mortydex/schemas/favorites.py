"""Pydantic schemas that power the favorites API surface and client engine."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mortydex.schemas.character import Character


class FavoriteCharacterSnapshot(BaseModel):
    """Character fields copied into the store when a favorite is added.

    The store keeps a denormalized snapshot so that favorites lists render
    without calling back into the directory.
    """

    character_id: int = Field(..., ge=1, description="Integer form of the upstream id")
    character_name: str = Field(..., min_length=1, max_length=255)
    character_image: str | None = Field(None, max_length=1024)
    character_status: str | None = Field(None, max_length=32)
    character_species: str | None = Field(None, max_length=64)

    @classmethod
    def from_character(cls, character: Character) -> FavoriteCharacterSnapshot:
        return cls(
            character_id=character.character_id,
            character_name=character.name,
            character_image=character.image or None,
            character_status=character.status.value,
            character_species=character.species or None,
        )


class FavoriteEntry(FavoriteCharacterSnapshot):
    """Read model for a single favorite owned by ``user_id``."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Opaque identifier assigned by the store")
    user_id: str = Field(..., min_length=1, max_length=128)
    created_at: datetime = Field(
        ..., description="Timestamp when the character was added to favorites."
    )
    provisional: bool = Field(
        False,
        exclude=True,
        description=(
            "True when ``id`` was synthesized locally because the store did not"
            " return one. Provisional ids are never sent back to the store."
        ),
    )


class FavoriteListResponse(BaseModel):
    """Container returned by the favorites listing endpoint."""

    total: int
    favorites: list[FavoriteEntry]
