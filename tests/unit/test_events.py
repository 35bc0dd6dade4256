"""Unit tests for frontend event tracking"""

import logging
from datetime import datetime, timezone

import pytest

from revenue_gateway.infrastructure.database.models import Base
from revenue_gateway.infrastructure.database.repositories import InMemoryEventRepository, SqlEventRepository
from revenue_gateway.infrastructure.database.session import get_engine, get_session_factory
from revenue_gateway.services.events import EventService


@pytest.fixture
def sql_event_repository(tmp_path) -> SqlEventRepository:
    database_url = f"sqlite:///{tmp_path}/events.db"
    Base.metadata.create_all(get_engine(database_url))
    return SqlEventRepository(get_session_factory(database_url))


@pytest.fixture(params=["memory", "sql"])
def event_repository(request):
    if request.param == "memory":
        return InMemoryEventRepository()
    return request.getfixturevalue("sql_event_repository")


def test_track_stores_event(event_repository):
    service = EventService(event_repository)
    service.track("form_started", "merchant-42", {"step": 1})
    service.track("form_submitted", "merchant-42")
    service.track("form_started", "merchant-7")

    events = event_repository.list_for_merchant("merchant-42")

    assert [event.event_name for event in events] == ["form_started", "form_submitted"]
    assert events[0].metadata == {"step": 1}
    assert events[1].metadata == {}


def test_track_keeps_client_timestamp():
    repository = InMemoryEventRepository()
    occurred_at = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)

    EventService(repository).track("offer_viewed", "merchant-42", occurred_at=occurred_at)

    [event] = repository.list_for_merchant("merchant-42")
    assert event.occurred_at == occurred_at


def test_demo_mode_only_logs(caplog):
    caplog.set_level(logging.INFO)
    repository = InMemoryEventRepository()

    event = EventService(repository, demo_mode=True).track("offer_viewed", "merchant-42", {"amount": 100_000})

    assert event.event_name == "offer_viewed"
    assert repository.list_for_merchant("merchant-42") == []
    [record] = [r for r in caplog.records if r.getMessage() == "event_tracked"]
    assert record.event_name == "offer_viewed"
    assert record.merchant_id == "merchant-42"
    assert record.metadata == {"amount": 100_000}
