"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request

from revenue_gateway.config import settings
from revenue_gateway.infrastructure.clients.factory import build_source_adapters
from revenue_gateway.infrastructure.database.models import Base
from revenue_gateway.infrastructure.database.repositories import (
    ApplicationRepository,
    EventRepository,
    InMemoryApplicationRepository,
    InMemoryEventRepository,
    SqlApplicationRepository,
    SqlEventRepository,
)
from revenue_gateway.infrastructure.database.session import get_engine, get_session_factory
from revenue_gateway.services.applications import ApplicationService
from revenue_gateway.services.events import EventService
from revenue_gateway.services.underwriting import UnderwritingService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def build_repository() -> ApplicationRepository:
    if settings.store_backend == "sql":
        Base.metadata.create_all(bind=get_engine())
        return SqlApplicationRepository(get_session_factory())
    return InMemoryApplicationRepository()


def build_event_repository() -> EventRepository:
    if settings.store_backend == "sql":
        Base.metadata.create_all(bind=get_engine())
        return SqlEventRepository(get_session_factory())
    return InMemoryEventRepository()


def build_underwriting_service() -> UnderwritingService:
    return UnderwritingService(
        build_source_adapters(settings),
        approval_threshold=settings.approval_threshold,
        default_pre_approved_amount=settings.default_pre_approved_amount,
        parallel_fetch=settings.parallel_fetch,
    )


@lru_cache
def get_application_service() -> ApplicationService:
    """Process-wide application service (one store, one set of adapters)"""
    return ApplicationService(build_repository(), build_underwriting_service())


@lru_cache
def get_event_service() -> EventService:
    return EventService(build_event_repository(), demo_mode=settings.demo_mode)
