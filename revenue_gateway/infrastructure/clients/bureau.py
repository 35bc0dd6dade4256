"""Credit bureau client"""

from revenue_gateway.domain.exceptions import SourceAPIError
from revenue_gateway.domain.models import BureauResult, DataSource, SourceQuery
from revenue_gateway.infrastructure.clients.base import HttpSourceAdapter, StubSourceAdapter, coerce_number


class BureauClient(HttpSourceAdapter):
    """Queries the bureau score for an RFC through the configured bureau gateway"""

    source = DataSource.BUREAU
    result_type = BureauResult

    async def _fetch(self, query: SourceQuery) -> BureauResult:
        async with self.client() as client:
            data = await self.get_json(client, f"{self.base_url}/scores/{query.tax_id}")

        score = data.get("bureau_score")
        if score is None:
            raise SourceAPIError("Bureau response without bureau_score")

        return BureauResult(
            connected=True,
            bureau_score=coerce_number(score, int),
            active_debt_amount=coerce_number(data.get("active_debt_amount")),
        )


class StubBureauClient(StubSourceAdapter):
    """Healthy demo profile: score 720, no active debt"""

    source = DataSource.BUREAU
    result_type = BureauResult
    default_delay_seconds = 0.15

    def stub_result(self, query: SourceQuery) -> BureauResult:
        return BureauResult(connected=True, bureau_score=720, active_debt_amount=0)
