"""Request validation and forwarding for directory page queries."""

from __future__ import annotations

import logging
import re
from typing import Any

from mortydex.errors import InvalidFilter, InvalidPage
from mortydex.schemas.character import MAX_PAGE_NUMBER
from mortydex.services.directory_source import DirectoryDataSource
from mortydex.services.filter_validator import validate_filter

logger = logging.getLogger(__name__)

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def coerce_page(value: Any) -> int:
    """Return ``value`` as a page number or raise :class:`InvalidPage`.

    Accepts integers, integral floats, and decimal integer strings. Booleans
    are rejected even though ``bool`` subclasses ``int``.
    """

    page: int | None = None
    if isinstance(value, bool):
        page = None
    elif isinstance(value, int):
        page = value
    elif isinstance(value, float) and value.is_integer():
        page = int(value)
    elif isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()):
        page = int(value.strip())

    if page is None or page < 1:
        raise InvalidPage(
            "Invalid page parameter. Must be a positive integer.", value=value
        )
    if page > MAX_PAGE_NUMBER:
        raise InvalidPage(
            f"Page number must be at most {MAX_PAGE_NUMBER}.", value=value
        )
    return page


class CharacterQueryGateway:
    """Turn untrusted page/filter input into a single upstream directory query.

    The gateway is stateless: it keeps a reference to the data source and
    nothing else, so one instance can serve any number of concurrent
    requests. Results are returned exactly as the upstream produced them.
    """

    def __init__(self, source: DirectoryDataSource) -> None:
        self._source = source

    async def get_characters(self, page: Any = 1, raw_filter: Any = None) -> dict[str, Any]:
        page_number = coerce_page(page)

        result = validate_filter(raw_filter)
        if result.errors:
            logger.warning(
                "Rejected directory query with %s invalid filter field(s)",
                len(result.errors),
            )
            raise InvalidFilter(result.errors)

        logger.debug(
            "Forwarding directory query page=%s filter=%s",
            page_number,
            result.sanitized.to_variables() if result.sanitized else None,
        )
        return await self._source.fetch_characters(
            page=page_number, filter=result.sanitized
        )


__all__ = ["CharacterQueryGateway", "coerce_page"]
