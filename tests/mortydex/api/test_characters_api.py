"""Route tests for ``/characters`` using an in-memory directory source."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mortydex.errors import UpstreamError
from mortydex.main import app
from mortydex.schemas.character import FilterCriteria
from mortydex.services.dependencies import get_query_gateway
from mortydex.services.query_gateway import CharacterQueryGateway


class FakeDirectorySource:
    """Returns a canned page (or raises) and records the forwarded arguments."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self.payload = payload
        self.error: Exception | None = None
        self.calls: list[tuple[int, FilterCriteria | None]] = []

    async def fetch_characters(self, *, page: int, filter: FilterCriteria | None):
        self.calls.append((page, filter))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def source(directory_payload) -> FakeDirectorySource:
    return FakeDirectorySource(directory_payload)


@pytest_asyncio.fixture
async def client(source: FakeDirectorySource) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_query_gateway] = lambda: CharacterQueryGateway(source)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_post_characters_returns_upstream_data(client, source, directory_payload) -> None:
    response = await client.post(
        "/characters", json={"page": 1, "filter": {"name": "<script>rick", "status": "Alive"}}
    )

    assert response.status_code == 200
    assert response.json() == directory_payload
    assert source.calls == [(1, FilterCriteria(name="scriptrick", status="Alive"))]
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_post_characters_without_body_defaults_to_first_page(client, source) -> None:
    response = await client.post("/characters")

    assert response.status_code == 200
    assert source.calls == [(1, None)]


@pytest.mark.asyncio
async def test_invalid_page_is_rejected_with_400(client, source) -> None:
    response = await client.post("/characters", json={"page": 1001})

    assert response.status_code == 400
    payload = response.json()
    assert payload["error_type"] == "validation_error"
    assert payload["message"] == "Page number must be at most 1000."
    assert payload["errors"][0]["field"] == "page"
    assert source.calls == []


@pytest.mark.asyncio
async def test_invalid_filter_lists_every_field_error(client, source) -> None:
    response = await client.post(
        "/characters", json={"page": 1, "filter": {"status": "Martian", "gender": "Robot"}}
    )

    assert response.status_code == 400
    payload = response.json()
    assert payload["message"] == "Invalid filter parameters"
    assert [error["field"] for error in payload["errors"]] == [
        "filter.status",
        "filter.gender",
    ]
    assert source.calls == []


@pytest.mark.asyncio
async def test_upstream_failure_maps_to_502(client, source) -> None:
    source.error = UpstreamError("Directory API returned status: 500", status_code=500)

    response = await client.post("/characters", json={"page": 2})

    assert response.status_code == 502
    payload = response.json()
    assert payload["error_type"] == "upstream_error"
    assert payload["message"] == "Directory API returned status: 500"
    assert payload["path"] == "/characters"


@pytest.mark.asyncio
async def test_malformed_json_body_is_a_422(client, source) -> None:
    response = await client.post(
        "/characters",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json()["error_type"] == "validation_error"
    assert source.calls == []


@pytest.mark.asyncio
async def test_get_characters_reads_query_string(client, source) -> None:
    response = await client.get(
        "/characters", params={"page": "3", "species": "Alien", "name": " Bird "}
    )

    assert response.status_code == 200
    assert source.calls == [(3, FilterCriteria(name="Bird", species="Alien"))]


@pytest.mark.asyncio
async def test_get_characters_rejects_non_numeric_page(client, source) -> None:
    response = await client.get("/characters", params={"page": "two"})

    assert response.status_code == 400
    assert response.json()["message"] == (
        "Invalid page parameter. Must be a positive integer."
    )
    assert source.calls == []


@pytest.mark.asyncio
async def test_incoming_request_id_is_echoed(client) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "trace-42"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"] == "trace-42"
