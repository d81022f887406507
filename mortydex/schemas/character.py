"""Pydantic models describing characters served by the directory API."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE_NUMBER = 1000
MAX_TEXT_FILTER_LENGTH = 100


class CharacterStatus(str, Enum):
    """Life status values reported by the directory."""

    ALIVE = "Alive"
    DEAD = "Dead"
    UNKNOWN = "unknown"


ALLOWED_STATUS_VALUES: tuple[str, ...] = tuple(status.value for status in CharacterStatus)
ALLOWED_SPECIES_VALUES: tuple[str, ...] = (
    "Human",
    "Alien",
    "Humanoid",
    "Robot",
    "Animal",
    "Cronenberg",
    "Mythological Creature",
    "Poopybutthole",
    "unknown",
)
ALLOWED_GENDER_VALUES: tuple[str, ...] = ("Male", "Female", "Genderless", "unknown")


class CharacterLocation(BaseModel):
    """Name reference to an origin or last-known location."""

    model_config = ConfigDict(frozen=True)

    name: str = "Unknown"


class EpisodeReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str


class Character(BaseModel):
    """A single directory record as returned by the upstream API."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Upstream identifier, numeric but sent as a string")
    name: str
    status: CharacterStatus = CharacterStatus.UNKNOWN
    species: str = ""
    type: str = ""
    gender: str = "unknown"
    origin: CharacterLocation = Field(default_factory=CharacterLocation)
    location: CharacterLocation = Field(default_factory=CharacterLocation)
    image: str = ""
    episode: list[EpisodeReference] = Field(default_factory=list)
    created: str = Field("", description="ISO-8601 creation timestamp or empty")

    @property
    def character_id(self) -> int:
        """Integer form of ``id`` used to key favorites."""

        return int(self.id)


class CharactersInfo(BaseModel):
    """Pagination metadata attached to every directory page."""

    count: int = Field(0, ge=0, description="Total number of matching characters")
    pages: int = Field(0, ge=0, description="Total number of pages")
    next: int | None = None
    prev: int | None = None


class DirectoryPage(BaseModel):
    """One page of characters plus its pagination metadata."""

    info: CharactersInfo
    results: list[Character] = Field(default_factory=list)


class CharactersResponse(BaseModel):
    """Envelope returned by ``POST /characters`` on success."""

    characters: DirectoryPage | None = None


class FilterCriteria(BaseModel):
    """Sanitized directory filter; absent fields are omitted upstream."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    status: str | None = None
    species: str | None = None
    gender: str | None = None
    type: str | None = None

    def to_variables(self) -> dict[str, str]:
        """Return the GraphQL ``FilterCharacter`` input with unset fields dropped."""

        return self.model_dump(exclude_none=True)


class CharacterQueryRequest(BaseModel):
    """Raw request body accepted by the gateway.

    Both fields are intentionally untyped: the gateway performs its own
    coercion so that malformed values yield field-scoped 400 responses rather
    than generic 422s.
    """

    page: Any = 1
    filter: Any = None


__all__ = [
    "ALLOWED_GENDER_VALUES",
    "ALLOWED_SPECIES_VALUES",
    "ALLOWED_STATUS_VALUES",
    "Character",
    "CharacterLocation",
    "CharacterQueryRequest",
    "CharacterStatus",
    "CharactersInfo",
    "CharactersResponse",
    "DirectoryPage",
    "EpisodeReference",
    "FilterCriteria",
    "MAX_PAGE_NUMBER",
    "MAX_TEXT_FILTER_LENGTH",
]
