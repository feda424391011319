"""Run the relay with uvicorn: `python -m adsb_relay`."""

import logging

import uvicorn

from adsb_relay.config import get_settings
from adsb_relay.infrastructure.observability import setup_logging

logger = logging.getLogger("adsb_relay")


def run() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        "Starting server.",
        extra={"port": settings.port, "protocol": settings.protocol},
    )
    uvicorn.run(
        "adsb_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
