"""Upstream HTTP client — one GET per call, failures classified."""

import logging

import httpx
from fastapi import Request

from errors import NetworkError, UpstreamError
from models import UpstreamTarget

logger = logging.getLogger(__name__)

# httpx logs full request URLs at INFO, query string (api_key) included
logging.getLogger("httpx").setLevel(logging.WARNING)


def build_http_client(user_agent: str, timeout: float) -> httpx.AsyncClient:
    """Create the shared client used for every upstream call."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": user_agent},
    )


async def _read_excerpt(resp: httpx.Response, limit: int) -> str:
    """Read at most about ``limit`` bytes of an error body; the rest is never pulled."""
    buffer = bytearray()
    try:
        async for chunk in resp.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) >= limit:
                break
    except httpx.HTTPError as e:
        logger.debug("Error body unreadable after %d bytes: %s", len(buffer), e)
    try:
        text = bytes(buffer[:limit]).decode(resp.charset_encoding or "utf-8", errors="replace")
    except LookupError:
        text = bytes(buffer[:limit]).decode("utf-8", errors="replace")
    return (text or resp.reason_phrase)[:limit]


async def open_upstream(
    client: httpx.AsyncClient,
    target: UpstreamTarget,
    error_excerpt: int = 500,
) -> httpx.Response:
    """
    Send ``target`` and return the response with its body still unread.

    The caller owns the returned response and must close it. A non-2xx
    status raises UpstreamError carrying the status and a bounded excerpt
    of the body; a transport failure (DNS, refused connection, timeout)
    raises NetworkError. Nothing is retried.
    """
    request = client.build_request(
        target.method, target.url, headers=target.headers, params=target.params,
    )
    try:
        resp = await client.send(request, stream=True)
    except httpx.HTTPError as e:
        logger.error("Upstream unreachable: %s %s (%s)", target.method, target.url, e)
        raise NetworkError(str(e) or e.__class__.__name__) from e

    if not resp.is_success:
        try:
            message = await _read_excerpt(resp, error_excerpt)
        finally:
            await resp.aclose()
        logger.warning("Upstream %s %s responded %d", target.method, target.url, resp.status_code)
        raise UpstreamError(resp.status_code, message)

    return resp


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency: the client opened in the app lifespan."""
    return request.app.state.http_client
