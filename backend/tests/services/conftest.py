"""Service test fixtures - a RelayHandler over the fake upstream."""

import pytest

from adsb_relay.services.relay_handler import RelayHandler


@pytest.fixture
def relay_handler(upstream_client):
    return RelayHandler(
        upstream_client,
        upstream_host="public-api.adsbexchange.com",
        upstream_path="/VirtualRadar/AircraftList.json",
    )
