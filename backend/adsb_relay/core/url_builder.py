"""URL Builder - composes the upstream URL from fixed parts and a forwarded query.

Invariants:
    - Pure: no IO, no network access
    - Every query key/value survives exactly, duplicates and order included
    - parse_qsl(urlsplit(url).query, keep_blank_values=True) == input pairs
    - Empty query produces no "?"
    - Space encodes as %20 (never "+"); !~*'() stay literal
"""

from collections.abc import Iterable, Mapping
from urllib.parse import quote, urlunsplit

# Characters left literal in query components, besides quote()'s own
# always-safe set (A-Z a-z 0-9 _ . - ~)
_QUERY_SAFE = "!*'()"

QueryInput = Mapping[str, str | Iterable[str]] | Iterable[tuple[str, str]]


def query_pairs(query: QueryInput | None) -> list[tuple[str, str]]:
    """Flatten a mapping or pair iterable into ordered (key, value) pairs.

    Mapping values that are sequences expand into repeated keys; multi-dicts
    (Starlette QueryParams) contribute every item, not just the last per key.
    """
    if not query:
        return []
    if hasattr(query, "multi_items"):
        return list(query.multi_items())
    if isinstance(query, Mapping):
        pairs = []
        for key, value in query.items():
            if isinstance(value, str):
                pairs.append((key, value))
            else:
                pairs.extend((key, item) for item in value)
        return pairs
    return [(key, value) for key, value in query]


def encode_query(query: QueryInput | None) -> str:
    """Percent-encode query pairs into a query string (no leading "?")."""
    return "&".join(
        f"{quote(key, safe=_QUERY_SAFE)}={quote(value, safe=_QUERY_SAFE)}"
        for key, value in query_pairs(query)
    )


def build_url(
    protocol: str, host: str, path: str, query: QueryInput | None = None,
) -> str:
    """Combine scheme, host, path and query into a dereferenceable URL."""
    scheme = protocol.rstrip(":")
    if not path.startswith("/"):
        path = "/" + path
    return urlunsplit((
        scheme, host, quote(path, safe="/"), encode_query(query), "",
    ))
