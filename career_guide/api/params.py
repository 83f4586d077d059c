"""
Query-string parsing shared by the list endpoints.

Parameters arrive as raw strings so that bad values produce our own
400 codes (INVALID_STREAM_ID, INVALID_LIMIT, ...) instead of FastAPI's 422.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Query

from career_guide.core.config import Settings, get_settings
from career_guide.core.errors import ValidationError

NO_FILTER_VALUES = {"", "all"}


def parse_int(raw: Optional[str], name: str, code: str) -> Optional[int]:
    """Parse an optional integer parameter. None/blank -> None."""
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ValidationError(f"Invalid {name} parameter", code=code, field=name)


def normalize_filter(value: Optional[str]) -> Optional[str]:
    """Equality filter value, or None when it should not filter ("", "all")."""
    if value is None:
        return None
    value = value.strip()
    if value.lower() in NO_FILTER_VALUES:
        return None
    return value


@dataclass(frozen=True)
class Page:
    limit: Optional[int]  # None: no LIMIT clause
    offset: int


def resolve_page(
    limit: Optional[str],
    offset: Optional[str],
    default_limit: Optional[int] = 50,
    max_limit: int = 100,
) -> Page:
    """
    limit defaults to `default_limit` and is capped at `max_limit`; offset defaults to 0.

    With `default_limit=None` an unpaged request (neither limit nor offset)
    returns every row; an offset on its own pages at `max_limit`.
    """
    parsed_limit = parse_int(limit, "limit", "INVALID_LIMIT")
    parsed_offset = parse_int(offset, "offset", "INVALID_OFFSET")

    if parsed_limit is not None and parsed_limit < 0:
        raise ValidationError("limit must not be negative", code="INVALID_LIMIT", field="limit")
    if parsed_offset is None:
        parsed_offset = 0
    if parsed_offset < 0:
        raise ValidationError("offset must not be negative", code="INVALID_OFFSET", field="offset")

    if parsed_limit is None:
        if default_limit is None and parsed_offset == 0:
            return Page(limit=None, offset=0)
        parsed_limit = default_limit if default_limit is not None else max_limit

    return Page(limit=min(parsed_limit, max_limit), offset=parsed_offset)


def get_page(
    limit: Optional[str] = Query(None, description="Max rows (default 50, capped at 100)"),
    offset: Optional[str] = Query(None, description="Rows to skip"),
    settings: Settings = Depends(get_settings),
) -> Page:
    """FastAPI dependency - pagination from ?limit=&offset=."""
    return resolve_page(limit, offset, settings.default_page_limit, settings.max_page_limit)


def get_optional_page(
    limit: Optional[str] = Query(None, description="Max rows (capped at 100); omit for every match"),
    offset: Optional[str] = Query(None, description="Rows to skip"),
    settings: Settings = Depends(get_settings),
) -> Page:
    """FastAPI dependency - like `get_page`, but unpaged unless the client asks."""
    return resolve_page(limit, offset, None, settings.max_page_limit)


def get_stream_id(stream_id: Optional[str] = Query(None, description="Filter by stream id")) -> Optional[int]:
    """FastAPI dependency - optional integer ?stream_id=."""
    return parse_int(stream_id, "stream_id", "INVALID_STREAM_ID")
