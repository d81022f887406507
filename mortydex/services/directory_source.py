"""Client for the upstream character directory GraphQL API."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from mortydex.errors import UpstreamError
from mortydex.schemas.character import FilterCriteria
from mortydex.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)

CHARACTERS_QUERY = """
query GetCharacters($page: Int!, $filter: FilterCharacter) {
  characters(page: $page, filter: $filter) {
    info {
      count
      pages
      next
      prev
    }
    results {
      id
      name
      status
      species
      type
      gender
      origin {
        name
      }
      location {
        name
      }
      image
      episode {
        id
      }
      created
    }
  }
}
"""


@runtime_checkable
class DirectoryDataSource(Protocol):
    """Paginated character search capability consumed by the gateway."""

    async def fetch_characters(
        self, *, page: int, filter: FilterCriteria | None
    ) -> dict[str, Any]:
        """Return the upstream ``data`` object or raise :class:`UpstreamError`."""


def build_directory_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Create the shared ``httpx.AsyncClient`` used for directory queries."""

    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.directory_timeout_seconds),
        headers={"Content-Type": "application/json", "Accept": "application/json"},
    )


class GraphQLDirectoryDataSource:
    """Issue ``GetCharacters`` queries against the directory GraphQL endpoint.

    Exactly one HTTP request is made per call. Transport failures, non-2xx
    statuses, undecodable bodies, and GraphQL ``errors`` arrays all surface as
    :class:`UpstreamError`; retrying is left to the caller.
    """

    def __init__(self, client: httpx.AsyncClient, *, endpoint: str) -> None:
        self._client = client
        self._endpoint = endpoint

    async def fetch_characters(
        self, *, page: int, filter: FilterCriteria | None
    ) -> dict[str, Any]:
        payload = {
            "query": CHARACTERS_QUERY,
            "variables": {
                "page": page,
                "filter": filter.to_variables() if filter is not None else None,
            },
        }

        try:
            response = await self._client.post(self._endpoint, json=payload)
        except httpx.TimeoutException as exc:
            logger.error("Directory request timed out for page %s: %s", page, exc)
            raise UpstreamError("Character directory request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Directory request failed for page %s: %s", page, exc)
            raise UpstreamError(f"Character directory request failed: {exc}") from exc

        if response.is_error:
            logger.error(
                "Directory API returned status %s for page %s",
                response.status_code,
                page,
            )
            raise UpstreamError(
                f"Directory API returned status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamError(
                "Directory API returned a malformed response",
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            raise UpstreamError(
                "Directory API returned a malformed response",
                status_code=response.status_code,
            )

        errors = body.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) else errors
            message = first.get("message") if isinstance(first, dict) else None
            logger.warning("Directory API rejected query for page %s: %s", page, message)
            raise UpstreamError(
                message or "Directory API rejected the query",
                status_code=response.status_code,
            )

        data = body.get("data")
        if data is None:
            return {"characters": None}
        return data


__all__ = [
    "CHARACTERS_QUERY",
    "DirectoryDataSource",
    "GraphQLDirectoryDataSource",
    "build_directory_client",
]
