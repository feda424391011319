"""Static Probes - empty answers for assets browsers request on their own.

Invariants:
    - Always 204 with an empty body, whatever the query string, for GET and HEAD
    - Never touches the upstream
"""

from fastapi import APIRouter, status
from fastapi.responses import Response

router = APIRouter(tags=["static"])


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


router.add_api_route("/favicon.ico", no_content, methods=["GET", "HEAD"])
router.add_api_route("/apple-touch-icon.png", no_content, methods=["GET", "HEAD"])
