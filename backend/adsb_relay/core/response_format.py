"""Response Format - parses the upstream body and renders the outbound payload.

Invariants:
    - Payload is passed through unchanged (parse + compact re-serialize) or
      rejected wholesale; never partially transformed
    - Empty bodies, NaN/Infinity literals, nesting too deep to parse or
      serialize, and any non-JSON text are rejected
    - JSONP mode only when the callback parameter is present, non-empty, and
      still non-empty after sanitizing
"""

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from adsb_relay.core.errors import InvalidUpstreamPayloadError, ErrorContext
from adsb_relay.core.url_builder import QueryInput, query_pairs

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
JSONP_MEDIA_TYPE = "text/javascript; charset=utf-8"

# Anything outside this set is stripped from a callback name
_CALLBACK_UNSAFE = re.compile(r"[^\[\]\w$.]", re.ASCII)
_SURROGATE = re.compile("[\ud800-\udfff]")


class ResponseMode(str, Enum):
    """Outbound formatting for a successful relay."""
    JSON = "json"
    JSONP = "jsonp"


@dataclass(frozen=True)
class FormattedBody:
    """Rendered body plus the headers it needs."""
    body: str
    media_type: str
    headers: dict[str, str] = field(default_factory=dict)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON literal {name}")


def parse_payload(text: str, context: ErrorContext | None = None) -> Any:
    """Parse upstream text as strict JSON or raise InvalidUpstreamPayloadError."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise InvalidUpstreamPayloadError(str(e), context) from e


def serialize_payload(payload: Any, context: ErrorContext | None = None) -> str:
    """Compact JSON, no whitespace between tokens, non-ASCII left as-is.

    Lone surrogates (only reachable through \\uD800-style escapes) are
    re-escaped so the body stays encodable as UTF-8.
    """
    try:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    except RecursionError as e:
        raise InvalidUpstreamPayloadError(str(e), context) from e
    return _SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", body)


def sanitize_callback(name: str) -> str:
    return _CALLBACK_UNSAFE.sub("", name)


def callback_from_query(query: QueryInput | None, callback_name: str) -> str | None:
    """First value of the callback parameter, sanitized; None if unusable."""
    for key, value in query_pairs(query):
        if key == callback_name and value:
            return sanitize_callback(value) or None
    return None


def select_mode(callback: str | None) -> ResponseMode:
    return ResponseMode.JSONP if callback else ResponseMode.JSON


def format_payload(
    payload: Any, callback: str | None = None, context: ErrorContext | None = None,
) -> FormattedBody:
    """Render a parsed payload as bare JSON or as a JSONP call to `callback`."""
    body = serialize_payload(payload, context)
    if select_mode(callback) is ResponseMode.JSON:
        return FormattedBody(body, JSON_MEDIA_TYPE)
    # U+2028/U+2029 are valid in JSON strings but terminate JS string literals
    body = body.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    return FormattedBody(
        f"{callback}({body})",
        JSONP_MEDIA_TYPE,
        {"X-Content-Type-Options": "nosniff"},
    )
