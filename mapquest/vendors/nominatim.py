"""Client utilities for the MapQuest-hosted Nominatim search API.

Nominatim is a geographic search service that relies solely on data
contributed to OpenStreetMap. See http://open.mapquestapi.com/nominatim/.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

import requests

from mapquest.core.errors import DecodeError, ParseError
from mapquest.core.payload import load_json
from mapquest.models import (
    NominatimAddress,
    NominatimSearchRequest,
    NominatimSearchResponse,
    NominatimSearchResult,
)

if TYPE_CHECKING:
    from mapquest.core.client import Client

logger = logging.getLogger(__name__)

NOMINATIM_PATH_PREFIX = "/nominatim/v1"

_DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

_STRUCTURED_FIELDS = (
    ("street", "street"),
    ("city", "city"),
    ("county", "county"),
    ("state", "state"),
    ("country", "country"),
    ("postal_code", "postalcode"),
)

_ADDRESS_FIELDS = (
    "city",
    "city_district",
    "continent",
    "country",
    "country_code",
    "county",
    "hamlet",
    "house_number",
    "pedestrian",
    "neighbourhood",
    "postcode",
    "road",
    "state",
    "state_district",
    "suburb",
)


class NominatimAPI:
    """Search binding bound to a :class:`Client`."""

    def __init__(self, client: Client, path_prefix: str = NOMINATIM_PATH_PREFIX) -> None:
        self._client = client
        self.path_prefix = path_prefix

    def search(self, request: NominatimSearchRequest) -> NominatimSearchResponse:
        url = self.build_search_url(request)
        payload = self._client.get_json(url)
        results = parse_search_results(payload)
        logger.info("Nominatim search returned %d results", len(results))
        return NominatimSearchResponse(results=tuple(results))

    def build_search_url(self, request: NominatimSearchRequest) -> str:
        return build_search_url(self._client.base_url, self.path_prefix, request, self._client.key)


def _format_float(value: float) -> str:
    return str(float(value))


def build_search_url(
    base_url: str,
    path_prefix: str,
    request: NominatimSearchRequest,
    api_key: str = "",
) -> str:
    """Return the complete search URL for ``request``, including the key when one is set.

    Any query already carried by the joined URL is kept and the search
    parameters are appended to it.
    """
    url = f"{base_url}{path_prefix}/search.php"
    # requests leaves URLs with a non-HTTP scheme unprepared, params included
    if ":" in url and not url.lower().startswith("http"):
        raise ParseError(f"malformed base URL {base_url!r}: only http(s) URLs are supported")

    params: Dict[str, str] = {"format": "json", "addressdetails": "1"}
    if request.query:
        params["q"] = request.query
    else:
        for attr, name in _STRUCTURED_FIELDS:
            value = getattr(request, attr)
            if value:
                params[name] = value
    if request.limit > 0:
        params["limit"] = str(request.limit)
    if request.country_codes:
        params["countrycodes"] = ",".join(request.country_codes)
    if len(request.view_box) == 4:
        params["viewbox"] = ",".join(_format_float(v) for v in request.view_box)
    elif request.view_box:
        logger.debug("Ignoring view box with %d values; exactly 4 are required", len(request.view_box))
    if request.exclude_place_ids:
        params["exclude_place_ids"] = ",".join(request.exclude_place_ids)
    if request.bounded is not None:
        params["bounded"] = "1" if request.bounded else "0"
    if request.route_width is not None:
        params["routewidth"] = _format_float(request.route_width)
    if request.osm_type:
        params["osm_type"] = request.osm_type
    if request.osm_id:
        params["osm_id"] = request.osm_id
    if api_key:
        params["key"] = api_key

    try:
        return requests.Request("GET", url, params=params).prepare().url
    except requests.RequestException as exc:
        raise ParseError(f"malformed base URL {base_url!r}: {exc}") from exc


def decode_search_results(body: Union[str, bytes]) -> List[NominatimSearchResult]:
    """Decode a raw response body into results, preserving service order."""
    try:
        payload = load_json(body)
    except DecodeError as exc:
        logger.error("Nominatim response is not valid JSON: %s", exc)
        raise
    return parse_search_results(payload)


def parse_search_results(payload: Any) -> List[NominatimSearchResult]:
    if not isinstance(payload, list):
        logger.error("Nominatim response is a %s, expected an array", type(payload).__name__)
        raise DecodeError(f"expected a JSON array, got {type(payload).__name__}")

    results: List[NominatimSearchResult] = []
    for index, raw in enumerate(payload):
        try:
            results.append(_to_result(raw))
        except DecodeError as exc:
            logger.error("Unable to decode Nominatim result %d: %s", index, exc)
            raise
    return results


def _to_result(raw: Any) -> NominatimSearchResult:
    if not isinstance(raw, dict):
        raise DecodeError(f"expected a JSON object, got {type(raw).__name__}")

    return NominatimSearchResult(
        address=_to_address(raw.get("address")),
        bounding_box=_get_float_list(raw, "boundingbox"),
        class_=_get_string(raw, "class"),
        display_name=_get_string(raw, "display_name"),
        importance=_get_number(raw, "importance"),
        latitude=_get_decimal_string(raw, "lat"),
        longitude=_get_decimal_string(raw, "lon"),
        osm_id=_get_id(raw, "osm_id"),
        osm_type=_get_string(raw, "osm_type"),
        place_id=_get_id(raw, "place_id"),
        type=_get_string(raw, "type"),
        license=_get_string(raw, "licence"),
    )


def _to_address(raw: Any) -> Optional[NominatimAddress]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DecodeError(f"field 'address': expected an object, got {type(raw).__name__}")
    return NominatimAddress(**{name: _get_string(raw, name) for name in _ADDRESS_FIELDS})


def _get_string(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field {key!r}: expected a string, got {type(value).__name__}")
    return value


def _get_id(raw: Dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _get_string(raw, key)


def _get_number(raw: Dict[str, Any], key: str) -> float:
    value = raw.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"field {key!r}: expected a number, got {type(value).__name__}")
    return float(value)


def _parse_decimal(key: str, value: Any) -> float:
    if not isinstance(value, str):
        raise DecodeError(f"field {key!r}: expected a numeric string, got {type(value).__name__}")
    if not _DECIMAL.fullmatch(value):
        raise DecodeError(f"field {key!r}: {value!r} is not a decimal number")
    return float(value)


def _get_decimal_string(raw: Dict[str, Any], key: str) -> float:
    value = raw.get(key)
    if value is None:
        return 0.0
    return _parse_decimal(key, value)


def _get_float_list(raw: Dict[str, Any], key: str) -> Tuple[float, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise DecodeError(f"field {key!r}: expected an array, got {type(value).__name__}")
    return tuple(_parse_decimal(key, item) for item in value)
