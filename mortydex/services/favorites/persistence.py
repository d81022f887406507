"""SQLAlchemy-backed favorites store."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mortydex.db.models import FavoriteCharacter
from mortydex.errors import StoreError
from mortydex.schemas.favorites import FavoriteCharacterSnapshot, FavoriteEntry
from mortydex.services.favorites.store import FavoriteAlreadyExists

logger = logging.getLogger(__name__)


class SqlAlchemyFavoritesStore:
    """Query/insert/delete access to the ``favorite_characters`` table.

    Each operation runs in its own session and commits before returning, so
    the store can be shared by concurrent callers. Database failures are
    re-raised as :class:`StoreError`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_for_user(self, user_id: str) -> list[FavoriteEntry]:
        """Return the user's favorites ordered by ``created_at`` descending."""

        query = (
            select(FavoriteCharacter)
            .where(FavoriteCharacter.user_id == user_id)
            .order_by(FavoriteCharacter.created_at.desc(), FavoriteCharacter.id)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.error("Failed to list favorites for %s: %s", user_id, exc)
            raise StoreError("Failed to fetch favorites") from exc
        return [FavoriteEntry.model_validate(row) for row in rows]

    async def insert(
        self, user_id: str, snapshot: FavoriteCharacterSnapshot
    ) -> FavoriteEntry:
        """Persist a favorite and return the stored row."""

        try:
            async with self._session_factory() as session:
                existing = await session.scalar(
                    select(FavoriteCharacter.id).where(
                        FavoriteCharacter.user_id == user_id,
                        FavoriteCharacter.character_id == snapshot.character_id,
                    )
                )
                if existing is not None:
                    raise FavoriteAlreadyExists(
                        f"Character {snapshot.character_id} is already a favorite"
                    )

                row = FavoriteCharacter(user_id=user_id, **snapshot.model_dump())
                session.add(row)
                await session.commit()
                return FavoriteEntry.model_validate(row)
        except IntegrityError as exc:
            # Lost a race with a concurrent insert for the same pair.
            raise FavoriteAlreadyExists(
                f"Character {snapshot.character_id} is already a favorite"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to add favorite %s for %s: %s",
                snapshot.character_id,
                user_id,
                exc,
            )
            raise StoreError("Failed to add favorite") from exc

    async def delete(self, user_id: str, character_id: int) -> None:
        """Delete the favorite for ``(user_id, character_id)``; missing rows are ignored."""

        statement = delete(FavoriteCharacter).where(
            FavoriteCharacter.user_id == user_id,
            FavoriteCharacter.character_id == character_id,
        )
        try:
            async with self._session_factory() as session:
                await session.execute(statement)
                await session.commit()
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to remove favorite %s for %s: %s", character_id, user_id, exc
            )
            raise StoreError("Failed to remove favorite") from exc


__all__ = ["SqlAlchemyFavoritesStore"]
