"""Relay Handler - turns one inbound request into one upstream call and back.

Invariants:
    - Idle -> AwaitingUpstream -> Completed(Success) | Completed(Failure)
    - No state shared between calls: the body buffer lives inside fetch_text
    - Success: 200 with the payload as JSON, or JSONP when a callback is given
    - Malformed/empty payload, or one too deep to parse or re-serialize:
      404 "Invalid Flight" as plain text
    - Transport failures propagate as RelayError (502/504) to the global handler

Design Decisions:
    - Constructed once by the app factory and closed over by the relay router
    - Upstream scheme is fixed to https; host and path come from settings
"""

import logging

from fastapi import status
from fastapi.responses import PlainTextResponse, Response

from adsb_relay.core.errors import InvalidUpstreamPayloadError, ErrorContext
from adsb_relay.core.response_format import (
    callback_from_query, format_payload, parse_payload, select_mode,
)
from adsb_relay.core.url_builder import QueryInput, build_url
from adsb_relay.infrastructure.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

UPSTREAM_SCHEME = "https"


class RelayHandler:
    """Relays aircraft-list queries to the fixed upstream API."""

    def __init__(
        self,
        upstream: UpstreamClient,
        upstream_host: str,
        upstream_path: str,
        callback_name: str = "callback",
    ):
        self.upstream = upstream
        self.upstream_host = upstream_host
        self.upstream_path = upstream_path
        self.callback_name = callback_name

    def upstream_url(self, query: QueryInput | None) -> str:
        return build_url(
            UPSTREAM_SCHEME, self.upstream_host, self.upstream_path, query,
        )

    async def handle(self, query: QueryInput | None) -> Response:
        """Relay one request; `query` is forwarded verbatim."""
        logger.info("Processing Flight")
        url = self.upstream_url(query)
        text = await self.upstream.fetch_text(url)

        callback = callback_from_query(query, self.callback_name)
        context = ErrorContext(upstream_url=url)
        try:
            formatted = format_payload(
                parse_payload(text, context), callback, context,
            )
        except InvalidUpstreamPayloadError as e:
            logger.warning(
                f"Invalid upstream payload: {e.reason}",
                extra={"upstream_url": url, "error_code": e.code},
            )
            return PlainTextResponse(
                e.message, status_code=status.HTTP_404_NOT_FOUND,
            )

        logger.debug(
            "Relayed upstream payload",
            extra={"upstream_url": url, "mode": select_mode(callback).value},
        )
        return Response(
            content=formatted.body,
            media_type=formatted.media_type,
            headers=formatted.headers,
        )
