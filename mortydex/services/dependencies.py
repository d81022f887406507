"""FastAPI dependency wiring for the gateway and favorites services.

Separating dependency factories from service implementation modules keeps the
latter free of web-layer concerns, enabling reuse from the session-side
client and from tests.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from mortydex.db.connection import get_session_factory
from mortydex.services.directory_source import GraphQLDirectoryDataSource
from mortydex.services.favorites import FavoritesStore, SqlAlchemyFavoritesStore
from mortydex.services.query_gateway import CharacterQueryGateway
from mortydex.settings import AppSettings, get_settings


def get_directory_client(request: Request) -> httpx.AsyncClient:
    """Return the process-wide ``httpx.AsyncClient`` created during lifespan startup."""

    return request.app.state.directory_client


def get_query_gateway(
    client: httpx.AsyncClient = Depends(get_directory_client),
    settings: AppSettings = Depends(get_settings),
) -> CharacterQueryGateway:
    """Provide a :class:`CharacterQueryGateway` bound to the configured endpoint."""

    source = GraphQLDirectoryDataSource(client, endpoint=settings.directory_api_url)
    return CharacterQueryGateway(source)


def get_favorites_store() -> FavoritesStore:
    """Provide the SQL-backed favorites store bound to the shared session factory."""

    return SqlAlchemyFavoritesStore(get_session_factory())


__all__ = ["get_directory_client", "get_favorites_store", "get_query_gateway"]
