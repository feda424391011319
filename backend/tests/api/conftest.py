"""API test fixtures - relay app wired to the fake upstream + in-process client.

Design Decisions:
    - ASGITransport does not run lifespan events, so the fixture closes the
      upstream client itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

from adsb_relay.config import Settings
from adsb_relay.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
async def relay_app(settings, fake_upstream):
    app = create_app(settings, upstream_transport=fake_upstream.transport)
    yield app
    await app.state.relay_handler.upstream.aclose()


@pytest.fixture
async def client(relay_app):
    """FastAPI test client driving the relay app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=relay_app), base_url="http://test",
    ) as c:
        yield c
