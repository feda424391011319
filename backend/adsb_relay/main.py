"""ADS-B Exchange Relay - FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - One RelayHandler per app, built here and closed over by the relay router
    - Global error handlers map RelayError -> structured JSON responses
    - CORS configured from settings (permissive by default)
    - Upstream client closed on shutdown via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adsb_relay import __version__
from adsb_relay.api.error_handlers import register_error_handlers
from adsb_relay.api.routes import health, relay, static_probes
from adsb_relay.config import Settings, get_settings
from adsb_relay.infrastructure.observability import setup_logging
from adsb_relay.infrastructure.upstream_client import UpstreamClient
from adsb_relay.services.relay_handler import RelayHandler

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the relay app. `upstream_transport` replaces the network in tests."""
    settings = settings or get_settings()
    logger.info("Initializing.")

    upstream = UpstreamClient(
        timeout_seconds=settings.upstream_timeout_seconds,
        transport=upstream_transport,
    )
    handler = RelayHandler(
        upstream,
        upstream_host=settings.upstream_host,
        upstream_path=settings.upstream_path,
        callback_name=settings.jsonp_callback_name,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        logger.info(
            "ADS-B relay started",
            extra={"port": settings.port, "protocol": settings.protocol},
        )
        yield
        await upstream.aclose()
        logger.info("ADS-B relay shutting down")

    app = FastAPI(
        title="ADS-B Exchange Relay", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.relay_handler = handler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    logger.info("Setting up routes.")
    app.include_router(static_probes.router)
    app.include_router(relay.build_router(handler))
    app.include_router(health.router)
    return app


app = create_app()
