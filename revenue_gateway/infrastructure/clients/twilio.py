"""Twilio Lookup v2 client - identity match, line type, SIM swap, WhatsApp Business"""

from urllib.parse import quote

import httpx

from revenue_gateway.domain.models import DataSource, SourceQuery, TwilioResult
from revenue_gateway.infrastructure.clients.base import HttpSourceAdapter, StubSourceAdapter

LOOKUP_BASE = "https://lookups.twilio.com/v2/PhoneNumbers"

# Used when the applicant did not provide a phone number
PLACEHOLDER_PHONE = "+525500000000"

RECENT_SWAP_PERIODS = ("PT24H", "P7D")


def lookup_phone(query: SourceQuery) -> str:
    return query.phone or PLACEHOLDER_PHONE


def parse_lookup(data: dict) -> TwilioResult:
    """
    Map a Lookup v2 response to carrier signals.

    - identity_match: first name matched as "exact" or "high"
    - sim_swap_detected: last swap within 24h or 7 days
    - whatsapp_business: only known when the add-on answered, else None
    """
    line_type_info = data.get("line_type_intelligence") or {}
    last_swap = (data.get("sim_swap") or {}).get("last_sim_swap") or {}
    name_score = (data.get("identity_match") or {}).get("first_name_match") or "no_data"

    whatsapp_addon = ((data.get("add_ons") or {}).get("results") or {}).get("whatsapp_business") or {}
    if whatsapp_addon.get("status") == "successful":
        whatsapp_business = (whatsapp_addon.get("result") or {}).get("registered") is True
    else:
        whatsapp_business = None

    return TwilioResult(
        connected=True,
        phone_number=data.get("phone_number"),
        identity_match=name_score in ("exact", "high"),
        name_match_score="high" if name_score == "exact" else name_score,
        whatsapp_business=whatsapp_business,
        line_type=line_type_info.get("type", "unknown"),
        sim_swap_detected=last_swap.get("swapped_period") in RECENT_SWAP_PERIODS,
        carrier_name=line_type_info.get("carrier_name") or data.get("calling_country_code"),
        country_code=data.get("country_code"),
    )


class TwilioLookupClient(HttpSourceAdapter):
    source = DataSource.TWILIO
    result_type = TwilioResult

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        timeout: float,
        base_url: str = LOOKUP_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, timeout, transport)
        self.auth = httpx.BasicAuth(account_sid, auth_token)

    async def _fetch(self, query: SourceQuery) -> TwilioResult:
        fields = ["line_type_intelligence", "sim_swap"]
        params = {}
        # Identity match needs at least one name to compare against carrier records
        if query.first_name or query.last_name:
            fields.append("identity_match")
        if query.first_name:
            params["FirstName"] = query.first_name
        if query.last_name:
            params["LastName"] = query.last_name
        params["Fields"] = ",".join(fields)

        async with self.client(auth=self.auth) as client:
            data = await self.get_json(
                client,
                f"{self.base_url}/{quote(lookup_phone(query), safe='')}",
                params=params,
            )
        return parse_lookup(data)


class StubTwilioLookupClient(StubSourceAdapter):
    source = DataSource.TWILIO
    result_type = TwilioResult
    default_delay_seconds = 0.18

    def stub_result(self, query: SourceQuery) -> TwilioResult:
        return TwilioResult(
            connected=True,
            phone_number=lookup_phone(query),
            identity_match=True,
            name_match_score="high",
            whatsapp_business=True,
            line_type="mobile",
            sim_swap_detected=False,
            carrier_name="Telcel",
            country_code="MX",
        )
