"""Chunked relay of an upstream body to the caller.

Once the relay starts, the response status and headers have already been
sent, so a failure can only end the body early. The relay records how it
finished and always closes the upstream response, including when the
server cancels it because the caller went away.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

import httpx

from errors import StreamError
from models import RelayOutcome

logger = logging.getLogger(__name__)


class BodyRelay:
    def __init__(self, upstream: httpx.Response, label: str = ""):
        self.upstream = upstream
        if not label:
            url = upstream.request.url
            label = f"{url.scheme}://{url.host}{url.path}"  # no query: it may carry the key
        self.label = label
        self.outcome: Optional[RelayOutcome] = None
        self.error: Optional[StreamError] = None
        self.bytes_sent = 0

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield upstream chunks as the caller consumes them."""
        try:
            async for chunk in self.upstream.aiter_bytes():
                # Suspends here until the server has written the previous
                # chunk, so we never read ahead of the caller.
                yield chunk
                self.bytes_sent += len(chunk)
            self.outcome = RelayOutcome.COMPLETED
        except httpx.HTTPError as e:
            # Headers are committed: end the body instead of raising.
            self.outcome = RelayOutcome.UPSTREAM_FAILED
            self.error = StreamError(f"Stream error relaying {self.label} after {self.bytes_sent} bytes: {e}")
            logger.error(self.error.message)
        except (asyncio.CancelledError, GeneratorExit):
            self.outcome = RelayOutcome.CLIENT_DISCONNECTED
            raise
        finally:
            await self.close()
            logger.info(
                "Relay %s: %s (%d bytes)",
                self.outcome.value if self.outcome else "aborted", self.label, self.bytes_sent,
            )

    async def close(self) -> None:
        if not self.upstream.is_closed:
            await self.upstream.aclose()
