"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from revenue_gateway.api.dependencies import get_application_service, get_event_service
from revenue_gateway.api.main import create_app
from revenue_gateway.domain.models import Application, DataSource, FormData
from revenue_gateway.infrastructure.clients.bureau import StubBureauClient
from revenue_gateway.infrastructure.clients.factory import SourceAdapters
from revenue_gateway.infrastructure.clients.meta import StubFacebookClient, StubInstagramClient
from revenue_gateway.infrastructure.clients.places import StubGooglePlacesClient
from revenue_gateway.infrastructure.clients.platform import StubPlatformClient
from revenue_gateway.infrastructure.clients.syntage import StubSyntageClient
from revenue_gateway.infrastructure.clients.twilio import StubTwilioLookupClient
from revenue_gateway.infrastructure.database.repositories import (
    InMemoryApplicationRepository,
    InMemoryEventRepository,
)
from revenue_gateway.services.applications import ApplicationService
from revenue_gateway.services.events import EventService
from revenue_gateway.services.underwriting import UnderwritingService

TEST_THRESHOLD = 50_000
MAPS_URL = "https://www.google.com/maps/place/Los+Aguacates/@19.04,-98.2,17z/data=!4m6!3m5!1sChIJM8FgMXnHxYURW1vYTA2hgcg"


def timeouts(seconds: float = 1.0) -> dict:
    return {source: seconds for source in DataSource}


@pytest.fixture
def stub_adapters() -> SourceAdapters:
    """All seven providers stubbed, without artificial latency"""
    return SourceAdapters(
        syntage=StubSyntageClient(delay_seconds=0),
        google_places=StubGooglePlacesClient(delay_seconds=0),
        facebook=StubFacebookClient(delay_seconds=0),
        instagram=StubInstagramClient(delay_seconds=0),
        twilio=StubTwilioLookupClient(delay_seconds=0),
        bureau=StubBureauClient(delay_seconds=0),
        platform=StubPlatformClient(delay_seconds=0),
        timeouts=timeouts(),
    )


@pytest.fixture
def underwriting_service(stub_adapters: SourceAdapters) -> UnderwritingService:
    return UnderwritingService(stub_adapters, approval_threshold=TEST_THRESHOLD)


@pytest.fixture
def form_data() -> FormData:
    return FormData(
        legal_name="Maria Lopez Hernandez",
        tax_id="LOHM800101AB1",
        address="Av. Reforma 123, Puebla",
        email="maria@example.com",
        consent_given=True,
        phone="+525512345678",
        google_business_url=MAPS_URL,
        facebook_access_token="fb-token",
    )


@pytest.fixture
def application(form_data: FormData) -> Application:
    now = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    return Application(
        id="app-1",
        merchant_id="merchant-42",
        created_at=now,
        updated_at=now,
        form_data=form_data,
    )


@pytest.fixture
def application_service(underwriting_service: UnderwritingService) -> ApplicationService:
    return ApplicationService(InMemoryApplicationRepository(), underwriting_service)


@pytest.fixture
def event_service() -> EventService:
    return EventService(InMemoryEventRepository())


@pytest.fixture
def client(application_service: ApplicationService, event_service: EventService) -> TestClient:
    """Create FastAPI test client backed by the in-memory stores and stub sources"""
    app = create_app()
    app.dependency_overrides[get_application_service] = lambda: application_service
    app.dependency_overrides[get_event_service] = lambda: event_service
    return TestClient(app)
