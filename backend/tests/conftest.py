"""Root conftest - shared test configuration and the fake upstream.

Invariants:
    - Tests never reach the real upstream: every app/client gets the fake's
      MockTransport
    - Settings come from defaults, not from a developer's .env file
"""

import asyncio
import os
from collections.abc import Callable

import httpx
import pytest

from adsb_relay.infrastructure.upstream_client import UpstreamClient

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_FORMAT", "text")

AIRCRAFT_EMPTY = b'{"aircraft":[]}'


class FakeUpstream:
    """Controllable stand-in for the upstream API.

    - requests: every httpx.Request received, in order
    - body: bytes, a list of byte chunks (streamed), or a callable
      request -> bytes
    - error: exception raised instead of answering
    - delay: callable request -> seconds to sleep before answering
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.body: bytes | list[bytes] | Callable[[httpx.Request], bytes] = AIRCRAFT_EMPTY
        self.status_code = 200
        self.headers: dict[str, str] = {"Content-Type": "application/json"}
        self.error: Exception | None = None
        self.delay: Callable[[httpx.Request], float] | None = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay is not None:
            await asyncio.sleep(self.delay(request))
        if self.error is not None:
            raise self.error
        body = self.body(request) if callable(self.body) else self.body
        if isinstance(body, list):
            return httpx.Response(
                self.status_code, headers=self.headers, content=_stream(body),
            )
        return httpx.Response(
            self.status_code, headers=self.headers, content=body,
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


async def _stream(chunks: list[bytes]):
    for chunk in chunks:
        await asyncio.sleep(0)
        yield chunk


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
async def upstream_client(fake_upstream):
    client = UpstreamClient(timeout_seconds=2.0, transport=fake_upstream.transport)
    yield client
    await client.aclose()
