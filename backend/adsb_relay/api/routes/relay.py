"""Relay Route - GET /adsbexchange/ forwarded to the upstream aircraft list.

Invariants:
    - Query parameters forwarded verbatim (every item, original order)
    - Served with and without the trailing slash, for GET and HEAD
    - Route holds no logic beyond handing the query to the RelayHandler
"""

from fastapi import APIRouter, Request
from fastapi.responses import Response

from adsb_relay.services.relay_handler import RelayHandler

RELAY_PATHS = ("/adsbexchange/", "/adsbexchange")


def build_router(handler: RelayHandler) -> APIRouter:
    """Router for the relay endpoint, bound to one RelayHandler."""
    router = APIRouter(tags=["relay"])

    async def relay_aircraft_list(request: Request) -> Response:
        """Proxy the aircraft list; 200 JSON/JSONP or 404 'Invalid Flight'."""
        return await handler.handle(request.query_params)

    for path in RELAY_PATHS:
        router.add_api_route(
            path, relay_aircraft_list, methods=["GET", "HEAD"],
            include_in_schema=path == RELAY_PATHS[0],
        )
    return router
