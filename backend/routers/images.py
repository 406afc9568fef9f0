"""Image router — streams TMDB images from the gateway's own origin.

The browser only sees /api/image?path=/abc.jpg&size=w500; the image host
is chosen server-side and the path can never redirect the request elsewhere.
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from config import Settings, get_settings
from errors import NetworkError, UpstreamError, ValidationError, text_error_response
from services.relay import BodyRelay
from services.tmdb import image_target
from services.upstream import get_http_client, open_upstream
from services.validation import validate_image_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])

IMAGE_CACHE_CONTROL = "public, max-age=86400"  # images are treated as immutable for a day
DEFAULT_IMAGE_TYPE = "image/jpeg"
BAD_GATEWAY_MESSAGE = "Bad gateway: failed to fetch TMDB image."


@router.get("/image")
async def proxy_image(
    path: Optional[str] = Query(None, description="TMDB file path, e.g. /abc.jpg (no host)"),
    size: Optional[str] = Query(None, description="w92|w154|w185|w342|w500|w780|original"),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Relay a TMDB image without buffering it."""
    try:
        image = validate_image_request(path, size, strict_sizes=settings.strict_image_sizes)
    except ValidationError as e:
        return text_error_response(e)

    target = image_target(settings, image)
    try:
        upstream = await open_upstream(client, target, settings.upstream_error_excerpt)
    except UpstreamError as e:
        # Passthrough so a 403/404 from the image host stays visible to the caller
        return text_error_response(UpstreamError(e.status_code, f"TMDB responded {e.status_code}: {e.message}"))
    except NetworkError:
        return text_error_response(NetworkError(BAD_GATEWAY_MESSAGE))
    except Exception:
        logger.exception("Image proxy failed for %s", target.url)
        return text_error_response(NetworkError(BAD_GATEWAY_MESSAGE))

    relay = BodyRelay(upstream, label=target.url)
    return StreamingResponse(
        relay.stream(),
        media_type=upstream.headers.get("content-type") or DEFAULT_IMAGE_TYPE,
        headers={"Cache-Control": IMAGE_CACHE_CONTROL},
        background=BackgroundTask(relay.close),
    )
