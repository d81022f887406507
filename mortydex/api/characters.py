from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from mortydex.schemas.character import CharacterQueryRequest, CharactersResponse
from mortydex.services.dependencies import get_query_gateway
from mortydex.services.query_gateway import CharacterQueryGateway

router = APIRouter()

_RESPONSES = {200: {"model": CharactersResponse}}


@router.post("", responses=_RESPONSES)
@router.post("/", responses=_RESPONSES, include_in_schema=False)
async def query_characters(
    payload: CharacterQueryRequest | None = Body(None),
    gateway: CharacterQueryGateway = Depends(get_query_gateway),
) -> JSONResponse:
    """Validate the page/filter body and forward it to the character directory.

    The upstream payload is returned verbatim so pagination metadata survives
    untouched; validation and upstream failures are rendered by the
    application-level exception handlers.
    """

    payload = payload or CharacterQueryRequest()
    data = await gateway.get_characters(payload.page, payload.filter)
    return JSONResponse(content=data)


@router.get("", responses=_RESPONSES)
@router.get("/", responses=_RESPONSES, include_in_schema=False)
async def list_characters(
    page: str = Query("1", description="One-based page number (max 1000)"),
    name: str | None = Query(None, description="Substring match on character name"),
    status: str | None = Query(None, description="Alive, Dead, or unknown"),
    species: str | None = Query(None),
    gender: str | None = Query(None),
    type: str | None = Query(None),
    gateway: CharacterQueryGateway = Depends(get_query_gateway),
) -> JSONResponse:
    """Query-string flavour of ``POST /characters`` for links and bookmarks."""

    raw_filter = {
        key: value
        for key, value in (
            ("name", name),
            ("status", status),
            ("species", species),
            ("gender", gender),
            ("type", type),
        )
        if value is not None
    }
    data = await gateway.get_characters(page, raw_filter or None)
    return JSONResponse(content=data)
