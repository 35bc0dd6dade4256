"""Internal merchant data platform client"""

from revenue_gateway.domain.exceptions import SourceAPIError
from revenue_gateway.domain.models import DataSource, PlatformResult, SourceQuery
from revenue_gateway.infrastructure.clients.base import HttpSourceAdapter, StubSourceAdapter, coerce_number


class PlatformClient(HttpSourceAdapter):
    """GMV, tenure and pre-approved offer for a merchant"""

    source = DataSource.PLATFORM
    result_type = PlatformResult

    async def _fetch(self, query: SourceQuery) -> PlatformResult:
        async with self.client() as client:
            data = await self.get_json(client, f"{self.base_url}/merchants/{query.merchant_id}/analytics")

        if data.get("avg_platform_gmv_6m") is None:
            raise SourceAPIError("Platform response without avg_platform_gmv_6m")

        return PlatformResult(
            connected=True,
            avg_platform_gmv_6m=coerce_number(data["avg_platform_gmv_6m"]),
            tenure_months=coerce_number(data.get("tenure_months"), int, non_negative=True),
            pre_approved_amount=coerce_number(data.get("pre_approved_amount"), non_negative=True),
        )


class StubPlatformClient(StubSourceAdapter):
    """Demo merchant: 900K MXN/month GMV, 3 years on the platform, 50K pre-approved"""

    source = DataSource.PLATFORM
    result_type = PlatformResult
    default_delay_seconds = 0.1

    def stub_result(self, query: SourceQuery) -> PlatformResult:
        return PlatformResult(
            connected=True,
            avg_platform_gmv_6m=900_000,
            tenure_months=36,
            pre_approved_amount=50_000,
        )
