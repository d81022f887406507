"""Shared fixtures for database-backed stores and sample directory characters."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mortydex.db.models import Base
from mortydex.schemas.character import Character


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Provide a session factory bound to a fresh in-memory SQLite database."""
    pytest.importorskip("aiosqlite")
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


def _character_payload(character_id: int, name: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": str(character_id),
        "name": name,
        "status": "Alive",
        "species": "Human",
        "type": "",
        "gender": "Male",
        "origin": {"name": "Earth (C-137)"},
        "location": {"name": "Citadel of Ricks"},
        "image": f"https://rickandmortyapi.com/api/character/avatar/{character_id}.jpeg",
        "episode": [{"id": "1"}, {"id": "2"}],
        "created": "2017-11-04T18:48:46.250Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def rick() -> Character:
    return Character.model_validate(_character_payload(1, "Rick Sanchez"))


@pytest.fixture
def morty() -> Character:
    return Character.model_validate(_character_payload(2, "Morty Smith"))


@pytest.fixture
def birdperson() -> Character:
    return Character.model_validate(
        _character_payload(47, "Birdperson", species="Alien", status="Dead")
    )


@pytest.fixture
def directory_payload() -> dict[str, Any]:
    """Upstream ``data`` object for the first page of an unfiltered query."""
    return {
        "characters": {
            "info": {"count": 826, "pages": 42, "next": 2, "prev": None},
            "results": [
                _character_payload(1, "Rick Sanchez"),
                _character_payload(2, "Morty Smith"),
            ],
        }
    }
