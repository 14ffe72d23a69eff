"""CLI job to run a single Nominatim search and print the matches."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, TextIO

from mapquest.core.client import Client
from mapquest.core.config import get_settings
from mapquest.models import NominatimSearchRequest, NominatimSearchResult

logger = logging.getLogger(__name__)


def run_search_job(request: NominatimSearchRequest, client: Optional[Client] = None) -> List[NominatimSearchResult]:
    if not request.has_criteria():
        raise ValueError("A query or at least one address field is required")

    client = client or Client.from_settings()
    logger.info("Running Nominatim search for query=%s", request.query or _describe_address(request))
    response = client.nominatim().search(request)
    return list(response.results)


def to_result_row(result: NominatimSearchResult) -> Dict[str, Any]:
    return {
        "place_id": result.place_id,
        "display_name": result.display_name,
        "lat": result.latitude,
        "lon": result.longitude,
        "class": result.class_,
        "type": result.type,
        "importance": result.importance,
        "osm_type": result.osm_type,
        "osm_id": result.osm_id,
        "boundingbox": list(result.bounding_box),
        "licence": result.license,
        "address": asdict(result.address) if result.address is not None else None,
    }


def _describe_address(request: NominatimSearchRequest) -> str:
    parts = [request.street, request.city, request.county, request.state, request.country, request.postal_code]
    return ", ".join(filter(None, parts))


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search OpenStreetMap data through MapQuest Nominatim")
    parser.add_argument("--query", "-q", dest="query", default="", help="Free-text query; overrides address fields")
    parser.add_argument("--street", dest="street", default="", help="House number and street name")
    parser.add_argument("--city", dest="city", default="")
    parser.add_argument("--county", dest="county", default="")
    parser.add_argument("--state", dest="state", default="")
    parser.add_argument("--country", dest="country", default="")
    parser.add_argument("--postalcode", dest="postal_code", default="")
    parser.add_argument(
        "--limit",
        dest="limit",
        type=int,
        default=get_settings().default_limit,
        help="Maximum number of results to return",
    )
    parser.add_argument("--countrycodes", dest="country_codes", type=_split_csv, default=[], help="Comma-separated ISO codes")
    parser.add_argument(
        "--viewbox",
        dest="view_box",
        type=float,
        nargs=4,
        default=[],
        metavar=("WEST", "SOUTH", "EAST", "NORTH"),
        help="Preferred area for results",
    )
    parser.add_argument("--exclude-place-ids", dest="exclude_place_ids", type=_split_csv, default=[])
    parser.add_argument(
        "--bounded",
        dest="bounded",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Restrict results to the view box",
    )
    parser.add_argument("--route-width", dest="route_width", type=float, default=None)
    parser.add_argument("--osm-type", dest="osm_type", default="")
    parser.add_argument("--osm-id", dest="osm_id", default="")
    return parser


def request_from_args(args: argparse.Namespace) -> NominatimSearchRequest:
    return NominatimSearchRequest(
        query=args.query,
        street=args.street,
        city=args.city,
        county=args.county,
        state=args.state,
        country=args.country,
        postal_code=args.postal_code,
        limit=args.limit,
        country_codes=list(args.country_codes),
        view_box=list(args.view_box),
        exclude_place_ids=list(args.exclude_place_ids),
        bounded=args.bounded,
        route_width=args.route_width,
        osm_type=args.osm_type,
        osm_id=args.osm_id,
    )


def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    request = request_from_args(args)
    if not request.has_criteria():
        parser.error("provide --query or at least one address field")

    out = out or sys.stdout
    for result in run_search_job(request):
        out.write(json.dumps(to_result_row(result), ensure_ascii=False) + "\n")


if __name__ == "__main__":
    main()
