"""Google Places client - public Maps listing signals (no OAuth)"""

import logging
import re
from dataclasses import replace
from urllib.parse import unquote

import httpx

from revenue_gateway.domain.models import DataSource, PlacesResult, SourceQuery
from revenue_gateway.domain.signals import compute_signals_score
from revenue_gateway.infrastructure.clients.base import HttpSourceAdapter, StubSourceAdapter, coerce_number

PLACES_BASE = "https://maps.googleapis.com/maps/api/place"

DETAIL_FIELDS = (
    "name",
    "rating",
    "user_ratings_total",
    "price_level",
    "types",
    "website",
    "opening_hours",
    "business_status",
    "geometry",
)

_CHIJ_PATTERN = re.compile(r"!1s(ChIJ[^!&?]+)")
_CID_PATTERN = re.compile(r"[?&]cid=(\d+)")
_NAME_PATTERN = re.compile(r"/maps/place/([^/@?]+)")


def extract_place_identifier(maps_url: str) -> str | None:
    """
    Pull a Place ID, CID or business name out of a Google Maps URL.

    Supported shapes:
    - .../data=...!1sChIJ<place id>   -> Place ID
    - maps.google.com/?cid=<digits>   -> CID
    - /maps/place/<name>/...          -> business name, resolved via text search
    """
    match = _CHIJ_PATTERN.search(maps_url)
    if match:
        return unquote(match.group(1))

    match = _CID_PATTERN.search(maps_url)
    if match:
        return match.group(1)

    match = _NAME_PATTERN.search(maps_url)
    if match:
        return unquote(match.group(1).replace("+", " "))

    return None


class GooglePlacesClient(HttpSourceAdapter):
    """Client for the Google Places (Legacy) API"""

    source = DataSource.GOOGLE_PLACES
    result_type = PlacesResult

    def __init__(
        self,
        api_key: str,
        timeout: float,
        base_url: str = PLACES_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout, transport)
        self.api_key = api_key

    def has_required_input(self, query: SourceQuery) -> bool:
        return bool(query.listing_url)

    async def _fetch(self, query: SourceQuery) -> PlacesResult:
        identifier = extract_place_identifier(query.listing_url)
        if not identifier:
            logging.warning("google_places_invalid_url", extra={"url": query.listing_url})
            return PlacesResult.unavailable()

        async with self.client() as client:
            place_id = identifier
            # Anything other than a ChIJ Place ID (names, CIDs, hex ids) is resolved by text search
            if not identifier.startswith("ChIJ"):
                search = await self.get_json(
                    client,
                    f"{self.base_url}/findplacefromtext/json",
                    params={
                        "input": identifier,
                        "inputtype": "textquery",
                        "fields": "place_id",
                        "key": self.api_key,
                    },
                )
                candidates = search.get("candidates") or []
                place_id = candidates[0].get("place_id") if candidates else None
                if not place_id:
                    logging.warning("google_places_not_found", extra={"identifier": identifier})
                    return PlacesResult.unavailable()

            details = await self.get_json(
                client,
                f"{self.base_url}/details/json",
                params={
                    "place_id": place_id,
                    "fields": ",".join(DETAIL_FIELDS),
                    "key": self.api_key,
                    "language": "es-419",
                },
            )

        place = details.get("result")
        if not place:
            return PlacesResult.unavailable()

        listing = PlacesResult(
            connected=True,
            place_id=place_id,
            business_name=place.get("name"),
            rating=coerce_number(place.get("rating")),
            total_review_count=coerce_number(place.get("user_ratings_total"), int),
            price_level_index=coerce_number(place.get("price_level"), int),
            categories=place.get("types") or [],
            has_website=bool(place.get("website")),
            business_status=place.get("business_status", "UNKNOWN"),
            is_verified=True,  # Place Details only returns claimed listings
        )
        return replace(listing, signals_score=compute_signals_score(listing))


class StubGooglePlacesClient(StubSourceAdapter):
    """Demo listing: "Los Aguacates", Puebla MX"""

    source = DataSource.GOOGLE_PLACES
    result_type = PlacesResult
    default_delay_seconds = 0.3

    def has_required_input(self, query: SourceQuery) -> bool:
        return bool(query.listing_url)

    def stub_result(self, query: SourceQuery) -> PlacesResult:
        listing = PlacesResult(
            connected=True,
            place_id="ChIJM8FgMXnHxYURW1vYTA2hgcg",
            business_name="Los Aguacates",
            rating=3.9,
            total_review_count=214,
            rating_trend_3m=0.1,
            listing_age_years=6,
            location_count=1,
            price_level_index=2,
            is_verified=True,
            categories=["Mexican restaurant", "Taquería"],
            has_website=True,
            business_status="OPERATIONAL",
        )
        return replace(listing, signals_score=compute_signals_score(listing))
