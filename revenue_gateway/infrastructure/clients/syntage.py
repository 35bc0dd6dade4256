"""Syntage client - SAT revenue registry"""

import httpx

from revenue_gateway.domain.models import DataSource, SourceQuery, SyntageResult
from revenue_gateway.infrastructure.clients.base import HttpSourceAdapter, StubSourceAdapter, coerce_number


def parse_revenue(merchant_id: str, data: dict) -> SyntageResult:
    annual_revenue = coerce_number(data["annual_revenue"], non_negative=True)
    tax_compliance = data.get("tax_compliance")
    return SyntageResult(
        connected=True,
        merchant_id=data.get("merchant_id", merchant_id),
        annual_revenue=annual_revenue,
        monthly_revenue=annual_revenue / 12,
        months_active=coerce_number(data.get("months_active"), int),
        tax_regime=data.get("tax_regime"),
        cfdi_count_last_12m=coerce_number(data.get("cfdi_count_last_12m"), int),
        tax_compliance=True if tax_compliance is None else bool(tax_compliance),
        raw_response=data,
    )


class SyntageClient(HttpSourceAdapter):
    """Client for the Syntage fiscal data API"""

    source = DataSource.SYNTAGE
    result_type = SyntageResult

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout, transport)
        self.api_key = api_key

    async def _fetch(self, query: SourceQuery) -> SyntageResult:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "X-Client": "revenue-gateway/1.0",
        }
        async with self.client(headers=headers) as client:
            data = await self.get_json(client, f"{self.base_url}/merchants/{query.merchant_id}/revenue")
        return parse_revenue(query.merchant_id, data)


DEMO_REVENUE = {
    "annual_revenue": 720_000,  # 60k MXN/month
    "months_active": 36,
    "currency": "MXN",
    "tax_regime": "Régimen Simplificado de Confianza",
    "cfdi_count_last_12m": 847,
    "tax_compliance": True,
}


class StubSyntageClient(StubSourceAdapter):
    source = DataSource.SYNTAGE
    result_type = SyntageResult
    default_delay_seconds = 0.2

    def stub_result(self, query: SourceQuery) -> SyntageResult:
        return parse_revenue(query.merchant_id, {**DEMO_REVENUE, "merchant_id": query.merchant_id})
