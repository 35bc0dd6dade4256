"""Facebook Pages and Instagram Business clients (Graph API)"""

import logging

import httpx

from revenue_gateway.domain.exceptions import SourceAPIError
from revenue_gateway.domain.models import DataSource, FacebookResult, InstagramResult, SourceQuery
from revenue_gateway.infrastructure.clients.base import HttpSourceAdapter, StubSourceAdapter, coerce_number

GRAPH_BASE = "https://graph.facebook.com/v19.0"

VERIFIED_STATUSES = ("blue_verified", "gray_verified")
BUSINESS_ACCOUNT_TYPES = ("BUSINESS", "CREATOR")


def instagram_token(query: SourceQuery) -> str:
    """Instagram data is read with its own token, or the Facebook user token when absent"""
    return query.instagram_token or query.facebook_token


class FacebookClient(HttpSourceAdapter):
    """Reads the first Facebook Page managed by the OAuth-authorized user"""

    source = DataSource.FACEBOOK
    result_type = FacebookResult

    def __init__(
        self,
        timeout: float,
        base_url: str = GRAPH_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout, transport)

    def has_required_input(self, query: SourceQuery) -> bool:
        return bool(query.facebook_token)

    async def _fetch(self, query: SourceQuery) -> FacebookResult:
        async with self.client() as client:
            data = await self.get_json(
                client,
                f"{self.base_url}/me/accounts",
                params={
                    "access_token": query.facebook_token,
                    "fields": "id,name,fan_count,overall_star_rating,rating_count,verification_status,website",
                },
            )

        pages = data.get("data") or []
        if not pages:
            logging.warning("facebook_no_pages_found", extra={"merchant_id": query.merchant_id})
            return FacebookResult.unavailable()

        page = pages[0]
        return FacebookResult(
            connected=True,
            page_name=page.get("name"),
            fan_count=coerce_number(page.get("fan_count"), int),
            rating=coerce_number(page.get("overall_star_rating")),
            review_count=coerce_number(page.get("rating_count"), int),
            is_verified=page.get("verification_status") in VERIFIED_STATUSES,
            website=page.get("website") or "",
        )


class InstagramClient(HttpSourceAdapter):
    """Reads the Instagram Business profile linked to the user's first Facebook Page"""

    source = DataSource.INSTAGRAM
    result_type = InstagramResult

    def __init__(
        self,
        timeout: float,
        base_url: str = GRAPH_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout, transport)

    def has_required_input(self, query: SourceQuery) -> bool:
        return bool(instagram_token(query))

    async def _fetch(self, query: SourceQuery) -> InstagramResult:
        token = instagram_token(query)
        async with self.client() as client:
            pages = await self.get_json(
                client,
                f"{self.base_url}/me/accounts",
                params={"access_token": token, "fields": "id,instagram_business_account"},
            )
            first_page = (pages.get("data") or [{}])[0]
            account_id = (first_page.get("instagram_business_account") or {}).get("id")
            if not account_id:
                logging.warning("instagram_no_business_account", extra={"merchant_id": query.merchant_id})
                return InstagramResult.unavailable()

            profile = await self.get_json(
                client,
                f"{self.base_url}/{account_id}",
                params={"access_token": token, "fields": "username,followers_count,media_count,account_type"},
            )

        if "followers_count" not in profile:
            raise SourceAPIError("Instagram profile without followers_count")

        return InstagramResult(
            connected=True,
            username=profile.get("username"),
            followers_count=coerce_number(profile["followers_count"], int),
            media_count=coerce_number(profile.get("media_count"), int),
            is_business=profile.get("account_type") in BUSINESS_ACCOUNT_TYPES,
        )


class StubFacebookClient(StubSourceAdapter):
    source = DataSource.FACEBOOK
    result_type = FacebookResult
    default_delay_seconds = 0.2

    def stub_result(self, query: SourceQuery) -> FacebookResult:
        return FacebookResult(
            connected=True,
            page_name="Panadería Demo",
            fan_count=3200,
            rating=4.5,
            review_count=87,
            is_verified=False,
            website="",
        )


class StubInstagramClient(StubSourceAdapter):
    source = DataSource.INSTAGRAM
    result_type = InstagramResult
    default_delay_seconds = 0.15

    def stub_result(self, query: SourceQuery) -> InstagramResult:
        return InstagramResult(
            connected=True,
            username="panaderia_demo",
            followers_count=1850,
            media_count=142,
            is_business=True,
        )
