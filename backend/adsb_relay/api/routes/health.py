"""Health Probe - liveness endpoint for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up
    - No upstream call is made
"""

from fastapi import APIRouter, Request, status

from adsb_relay import __version__

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "adsb-relay",
        "version": __version__,
        "protocol": request.app.state.settings.protocol,
    }
