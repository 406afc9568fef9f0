"""Movies router — TMDB "Now Playing" with the API key kept server-side."""

import logging
import math
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from errors import ConfigurationError, NetworkError, UpstreamError, json_error_response
from services.tmdb import now_playing_target
from services.upstream import get_http_client, open_upstream

logger = logging.getLogger(__name__)

router = APIRouter(tags=["movies"])

NOW_PLAYING_CACHE_CONTROL = "public, max-age=60"


def parse_page(raw: Optional[str]) -> int | float:
    """Read ``page`` as a number, falling back to 1. No range checks; TMDB decides."""
    if not raw:
        return 1
    # int()/float() also accept "1_000" and non-ASCII digits
    if not raw.isascii() or "_" in raw:
        return 1
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        value = float(raw)
    except ValueError:
        return 1
    if not math.isfinite(value):
        return 1
    return int(value) if value.is_integer() else value


@router.get("/movies/now_playing")
async def now_playing(
    page: Optional[str] = Query(None, description="Result page, defaults to 1"),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Forward TMDB's now-playing listing."""
    if not settings.tmdb_enabled:
        missing = ConfigurationError("Missing TMDB_API_KEY env variable")
        return json_error_response(missing.message, status_code=missing.status_code)

    target = now_playing_target(settings, parse_page(page))
    try:
        upstream = await open_upstream(client, target, settings.upstream_error_excerpt)
        try:
            await upstream.aread()
            data = upstream.json()
        finally:
            await upstream.aclose()
    except UpstreamError as e:
        return json_error_response("TMDB error", e.message, status_code=e.status_code)
    except NetworkError as e:
        return json_error_response("Proxy failed", e.message, status_code=e.status_code)
    except Exception as e:
        logger.exception("Now playing proxy failed")
        return json_error_response("Proxy failed", str(e))

    return JSONResponse(content=data, headers={"Cache-Control": NOW_PLAYING_CACHE_CONTROL})
