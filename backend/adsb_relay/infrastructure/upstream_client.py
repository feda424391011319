"""Upstream Client - wraps httpx.AsyncClient with a timeout and error mapping.

Invariants:
    - One GET per call: no retries, no redirects followed, no caching
    - Body accumulated chunk by chunk in arrival order, no size limit
    - Bytes decoded as UTF-8 regardless of the upstream's declared charset;
      invalid sequences become U+FFFD
    - Timeouts mapped to UpstreamTimeoutError, every other transport failure
      to UpstreamUnavailableError (core/errors.py)
    - The upstream HTTP status is not inspected

Design Decisions:
    - One pooled AsyncClient per process, created by the app factory and
      closed in the lifespan shutdown
    - Transport injectable: tests pass httpx.MockTransport
"""

import codecs
import logging
import time

import httpx

from adsb_relay.core.errors import (
    ErrorContext, UpstreamTimeoutError, UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Issues streamed GETs against the upstream API."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
            follow_redirects=False,
        )

    async def fetch_text(self, url: str) -> str:
        """GET `url` and return the full body as text.

        Suspends at connection setup and at every body chunk.
        """
        context = ErrorContext(upstream_url=url)
        started = time.perf_counter()
        try:
            async with self.client.stream("GET", url) as response:
                text = await _read_text(response)
        except httpx.TimeoutException as e:
            logger.error(
                f"Upstream timeout: {type(e).__name__}",
                extra={"upstream_url": url},
            )
            raise UpstreamTimeoutError(self.timeout_seconds, context)
        except httpx.RequestError as e:
            logger.error(
                f"Upstream transport error: {type(e).__name__}: {e}",
                extra={"upstream_url": url},
            )
            raise UpstreamUnavailableError(type(e).__name__, context)

        logger.debug(
            "Upstream response received",
            extra={
                "upstream_url": url,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return text

    async def aclose(self) -> None:
        await self.client.aclose()


async def _read_text(response: httpx.Response) -> str:
    """Concatenate streamed chunks, decoding UTF-8 across chunk boundaries."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    chunks: list[str] = []
    async for chunk in response.aiter_bytes():
        chunks.append(decoder.decode(chunk))
    chunks.append(decoder.decode(b"", final=True))
    return "".join(chunks)
