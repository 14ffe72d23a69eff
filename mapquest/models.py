"""Data models for the Nominatim search endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(slots=True)
class NominatimSearchRequest:
    """Search parameters.

    A non-empty ``query`` takes precedence over the structured address
    fields, which are then ignored even when populated.
    """

    query: str = ""
    street: str = ""
    city: str = ""
    county: str = ""
    state: str = ""
    country: str = ""
    postal_code: str = ""
    limit: int = 0
    country_codes: List[str] = field(default_factory=list)
    view_box: List[float] = field(default_factory=list)
    exclude_place_ids: List[str] = field(default_factory=list)
    bounded: Optional[bool] = None
    route_width: Optional[float] = None
    osm_type: str = ""
    osm_id: str = ""

    def has_criteria(self) -> bool:
        return any((self.query, self.street, self.city, self.county, self.state, self.country, self.postal_code))


@dataclass(frozen=True, slots=True)
class NominatimAddress:
    """Address breakdown returned when ``addressdetails=1`` is requested."""

    city: str = ""
    city_district: str = ""
    continent: str = ""
    country: str = ""
    country_code: str = ""
    county: str = ""
    hamlet: str = ""
    house_number: str = ""
    pedestrian: str = ""
    neighbourhood: str = ""
    postcode: str = ""
    road: str = ""
    state: str = ""
    state_district: str = ""
    suburb: str = ""


@dataclass(frozen=True, slots=True)
class NominatimSearchResult:
    """A single place match; ``license`` is read from the ``licence`` key."""

    address: Optional[NominatimAddress] = None
    bounding_box: Tuple[float, ...] = ()
    class_: str = ""
    display_name: str = ""
    importance: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    osm_id: str = ""
    osm_type: str = ""
    place_id: str = ""
    type: str = ""
    license: str = ""


@dataclass(frozen=True, slots=True)
class NominatimSearchResponse:
    """Search matches in the order the service ranked them."""

    results: Tuple[NominatimSearchResult, ...] = ()
