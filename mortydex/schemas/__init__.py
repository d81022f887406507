"""Pydantic schemas for API requests and responses."""

from mortydex.schemas.character import (  # noqa: F401
    Character,
    CharacterQueryRequest,
    CharactersInfo,
    CharactersResponse,
    DirectoryPage,
    FilterCriteria,
)
from mortydex.schemas.favorites import (  # noqa: F401
    FavoriteCharacterSnapshot,
    FavoriteEntry,
    FavoriteListResponse,
)
