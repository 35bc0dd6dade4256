"""Common contract for external data source adapters"""

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

import httpx

from revenue_gateway.domain.exceptions import SourceAPIError
from revenue_gateway.domain.models import DataSource, SourceQuery, SourceResult


def coerce_number(value: Any, cast: Callable[[Any], Any] = float, non_negative: bool = False) -> Any:
    """
    Convert a provider figure to a finite number; None passes through.

    Raises:
        SourceAPIError: On booleans, non-finite or (optionally) negative values
        ValueError / TypeError: When the value cannot be converted at all
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise SourceAPIError(f"Expected a number, got {value!r}")

    number = cast(value)
    if not math.isfinite(number):
        raise SourceAPIError(f"Non-finite number from provider: {value!r}")
    if non_negative and number < 0:
        raise SourceAPIError(f"Negative figure from provider: {value!r}")
    return number


class SourceAdapter(ABC):
    """
    Wraps one external provider behind a uniform fetch(query) call.

    fetch() never raises for provider problems: transport errors, error
    statuses and malformed payloads are logged and turned into the
    provider's unavailable sentinel.
    """

    source: DataSource
    result_type: type[SourceResult] = SourceResult

    def has_required_input(self, query: SourceQuery) -> bool:
        """Whether the query carries what this provider needs to be called at all"""
        return True

    async def fetch(self, query: SourceQuery) -> SourceResult:
        if not self.has_required_input(query):
            logging.info(
                f"{self.source.value}_skipped",
                extra={"merchant_id": query.merchant_id, "source": self.source.value},
            )
            return self.result_type.unavailable()

        try:
            return await self._fetch(query)
        except (SourceAPIError, httpx.HTTPError, KeyError, IndexError, ValueError, TypeError, AttributeError) as e:
            logging.warning(
                f"{self.source.value}_fetch_failed",
                extra={"merchant_id": query.merchant_id, "source": self.source.value, "error": str(e)},
            )
            return self.result_type.unavailable()

    @abstractmethod
    async def _fetch(self, query: SourceQuery) -> SourceResult:
        """Provider-specific call; may raise, fetch() converts failures to the sentinel"""


class StubSourceAdapter(SourceAdapter):
    """Returns fixed demo data after a short artificial delay"""

    default_delay_seconds: float = 0.1

    def __init__(self, delay_seconds: float | None = None):
        self.delay_seconds = self.default_delay_seconds if delay_seconds is None else delay_seconds

    async def _fetch(self, query: SourceQuery) -> SourceResult:
        logging.info(
            f"{self.source.value}_demo_mode",
            extra={"merchant_id": query.merchant_id, "source": self.source.value},
        )
        await asyncio.sleep(self.delay_seconds)
        return self.stub_result(query)

    @abstractmethod
    def stub_result(self, query: SourceQuery) -> SourceResult:
        """Deterministic demo response for this provider"""


class HttpSourceAdapter(SourceAdapter):
    """Live provider reached over HTTP"""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def client(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, **kwargs)

    async def get_json(self, client: httpx.AsyncClient, url: str, **kwargs: Any) -> Dict[str, Any]:
        """GET and decode a JSON object, raising SourceAPIError on error statuses"""
        response = await client.get(url, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceAPIError(f"{self.source.value} API error: {e.response.status_code}") from e

        data = response.json()
        if not isinstance(data, dict):
            raise SourceAPIError(f"{self.source.value} returned a non-object payload")
        return data
