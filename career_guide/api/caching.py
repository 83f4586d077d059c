"""
Cached JSON responses for read endpoints.

The cache is best-effort: if it raises, the request is served from the
database as a MISS.
"""

import logging
from typing import Any, Callable

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from career_guide.core.cache import TTLCache
from career_guide.core.config import Settings

logger = logging.getLogger(__name__)

_MISSING = object()


def cached_json_response(
    cache: TTLCache,
    key: str,
    load: Callable[[], Any],
    settings: Settings,
) -> JSONResponse:
    """
    Serve `key` from the cache, or call `load()` and cache its result.

    Errors raised by `load()` propagate and nothing is cached.
    """
    payload = _MISSING
    try:
        payload = cache.get(key, _MISSING)
    except Exception as e:
        logger.warning("Cache read failed for %s: %s", key, e)

    if payload is _MISSING:
        logger.debug("Cache miss: %s", key)
        payload = jsonable_encoder(load())
        try:
            cache.set(key, payload, settings.cache_ttl_seconds)
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", key, e)
        status = "MISS"
    else:
        status = "HIT"

    return JSONResponse(
        content=payload,
        headers={
            "Cache-Control": settings.cache_control_header,
            "X-Cache": status,
        },
    )
