"""Unit tests for the application stores"""

from dataclasses import replace

import pytest

from revenue_gateway.domain.exceptions import ApplicationNotFoundError
from revenue_gateway.domain.models import Application, DecisionStatus
from revenue_gateway.infrastructure.database.models import Base
from revenue_gateway.infrastructure.database.repositories import (
    InMemoryApplicationRepository,
    SqlApplicationRepository,
    from_document,
    to_document,
)
from revenue_gateway.infrastructure.database.session import get_engine, get_session_factory
from revenue_gateway.services.underwriting import UnderwritingService


@pytest.fixture
def sql_repository(tmp_path) -> SqlApplicationRepository:
    database_url = f"sqlite:///{tmp_path}/applications.db"
    Base.metadata.create_all(get_engine(database_url))
    return SqlApplicationRepository(get_session_factory(database_url))


@pytest.fixture(params=["memory", "sql"])
def repository(request):
    if request.param == "memory":
        return InMemoryApplicationRepository()
    return request.getfixturevalue("sql_repository")


async def decided(application: Application, underwriting_service: UnderwritingService) -> Application:
    decision = await underwriting_service.run_underwriting(application)
    return replace(
        application,
        decision_status=decision.status,
        decision_payload=decision.payload,
        syntage_result=decision.syntage_result,
        places_result=decision.places_result,
        facebook_result=decision.facebook_result,
        instagram_result=decision.instagram_result,
        twilio_result=decision.twilio_result,
        bureau_result=decision.bureau_result,
        platform_result=decision.platform_result,
    )


def test_get_unknown_returns_none(repository):
    assert repository.get("missing") is None


def test_create_then_get(repository, application: Application):
    repository.create(application)
    stored = repository.get(application.id)

    assert stored.id == application.id
    assert stored.merchant_id == "merchant-42"
    assert stored.decision_status == DecisionStatus.UNDERWRITING_PENDING
    assert stored.form_data == application.form_data


async def test_update_persists_decision(repository, application: Application, underwriting_service: UnderwritingService):
    repository.create(application)
    repository.update(await decided(application, underwriting_service))

    stored = repository.get(application.id)
    assert stored.decision_status == DecisionStatus.APPROVED
    assert stored.decision_payload.credit_offer.approved_amount == 100_000
    assert stored.bureau_result.bureau_score == 720
    assert stored.places_result.categories == ["Mexican restaurant", "Taquería"]


def test_update_unknown_application(repository, application: Application):
    with pytest.raises(ApplicationNotFoundError) as exc_info:
        repository.update(application)
    assert exc_info.value.application_id == "app-1"


async def test_document_round_trip_keeps_types(application: Application, underwriting_service: UnderwritingService):
    full = await decided(application, underwriting_service)
    document = to_document(full)
    restored = from_document(document)

    assert isinstance(document["created_at"], str)
    assert document["decision_status"] == "APPROVED"
    assert restored.decision_status is DecisionStatus.APPROVED
    assert restored.decision_payload == full.decision_payload
    assert restored.syntage_result == full.syntage_result
