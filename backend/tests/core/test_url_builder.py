"""URL Builder tests - pure tests for build_url and query encoding.

Tests cover:
    - Fixed parts combine into the upstream URL
    - Empty query yields no "?"
    - Escaping: %20 for spaces, !*'() literal
    - Repeated keys and order survive, for mappings and pair lists
    - Every query decodes back to exactly the input pairs
"""

from urllib.parse import parse_qsl, urlsplit

import pytest
from starlette.datastructures import QueryParams

from adsb_relay.core.url_builder import build_url, encode_query, query_pairs

HOST = "public-api.adsbexchange.com"
PATH = "/VirtualRadar/AircraftList.json"


def _decoded(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


def test_builds_upstream_url_with_query():
    url = build_url("https", HOST, PATH, {"fAltL": "1000", "fAltU": "5000"})
    assert url == (
        "https://public-api.adsbexchange.com/VirtualRadar/AircraftList.json"
        "?fAltL=1000&fAltU=5000"
    )


def test_empty_query_has_no_question_mark():
    assert build_url("https", HOST, PATH, {}) == f"https://{HOST}{PATH}"
    assert build_url("https", HOST, PATH, None) == f"https://{HOST}{PATH}"


def test_protocol_trailing_colon_is_accepted():
    assert build_url("https:", HOST, PATH) == f"https://{HOST}{PATH}"


def test_path_without_leading_slash_gets_one():
    assert build_url("https", HOST, "VirtualRadar/AircraftList.json") == (
        f"https://{HOST}{PATH}"
    )


def test_space_encoded_as_percent_20():
    assert encode_query({"q": "a b"}) == "q=a%20b"


def test_node_unreserved_characters_stay_literal():
    assert encode_query({"v": "!~*'()-_."}) == "v=!~*'()-_."


def test_reserved_characters_are_escaped():
    assert encode_query({"a&b": "c=d+e#f?/"}) == "a%26b=c%3Dd%2Be%23f%3F%2F"


def test_non_ascii_is_utf8_percent_encoded():
    assert encode_query({"callsign": "ÆØÅ"}) == "callsign=%C3%86%C3%98%C3%85"


def test_sequence_values_become_repeated_keys():
    assert query_pairs({"icao": ["A1", "B2"], "lat": "51"}) == [
        ("icao", "A1"), ("icao", "B2"), ("lat", "51"),
    ]


def test_starlette_query_params_keep_every_item():
    params = QueryParams("icao=A1&lat=51&icao=B2")
    assert query_pairs(params) == [("icao", "A1"), ("lat", "51"), ("icao", "B2")]


@pytest.mark.parametrize("pairs", [
    [],
    [("lat", "51.47"), ("lng", "-0.45"), ("fDstL", "0"), ("fDstU", "100")],
    [("icao", "A1"), ("icao", "B2"), ("icao", "A1")],
    [("empty", ""), ("", "nameless")],
    [("q", "a b+c&d=e;f"), ("path", "/x/y?z#w"), ("pct", "100%")],
    [("ünï", "cødé ✈"), ("callback", "jQuery123_456")],
])
def test_query_round_trips_exactly(pairs):
    url = build_url("https", HOST, PATH, pairs)
    assert _decoded(url) == pairs
