"""Data access layer for merchant applications and tracked events"""

import threading
from typing import Any, Dict, List, Optional, Protocol

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from revenue_gateway.domain.exceptions import ApplicationNotFoundError
from revenue_gateway.domain.models import Application, TrackedEvent
from revenue_gateway.infrastructure.database.models import MerchantApplication, MerchantEvent

application_adapter = TypeAdapter(Application)


def to_document(application: Application) -> Dict[str, Any]:
    """JSON-compatible dict of an application, nested results included"""
    return application_adapter.dump_python(application, mode="json")


def from_document(document: Dict[str, Any]) -> Application:
    return application_adapter.validate_python(document)


class ApplicationRepository(Protocol):
    """Storage contract used by the application service"""

    def get(self, application_id: str) -> Optional[Application]: ...

    def create(self, application: Application) -> Application: ...

    def update(self, application: Application) -> Application: ...


class InMemoryApplicationRepository:
    """Process-local store keyed by application id; writes are serialized by a lock"""

    def __init__(self):
        self._applications: Dict[str, Application] = {}
        self._lock = threading.Lock()

    def get(self, application_id: str) -> Optional[Application]:
        return self._applications.get(application_id)

    def create(self, application: Application) -> Application:
        with self._lock:
            self._applications[application.id] = application
        return application

    def update(self, application: Application) -> Application:
        with self._lock:
            if application.id not in self._applications:
                raise ApplicationNotFoundError(application.id)
            self._applications[application.id] = application
        return application


class SqlApplicationRepository:
    """SQLAlchemy-backed store; each write is its own transaction"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, application_id: str) -> Optional[Application]:
        with self.session_factory() as db:
            record = db.get(MerchantApplication, application_id)
            if record is None:
                return None
            return from_document(record.document)

    def create(self, application: Application) -> Application:
        with self.session_factory() as db, db.begin():
            db.add(
                MerchantApplication(
                    id=application.id,
                    merchant_id=application.merchant_id,
                    decision_status=application.decision_status.value,
                    document=to_document(application),
                    created_at=application.created_at,
                    updated_at=application.updated_at,
                )
            )
        return application

    def update(self, application: Application) -> Application:
        with self.session_factory() as db, db.begin():
            record = db.get(MerchantApplication, application.id)
            if record is None:
                raise ApplicationNotFoundError(application.id)
            record.decision_status = application.decision_status.value
            record.document = to_document(application)
            record.updated_at = application.updated_at
        return application


class EventRepository(Protocol):
    def add(self, event: TrackedEvent) -> TrackedEvent: ...

    def list_for_merchant(self, merchant_id: str) -> List[TrackedEvent]: ...


class InMemoryEventRepository:
    """Append-only event log kept in process memory"""

    def __init__(self):
        self._events: List[TrackedEvent] = []
        self._lock = threading.Lock()

    def add(self, event: TrackedEvent) -> TrackedEvent:
        with self._lock:
            self._events.append(event)
        return event

    def list_for_merchant(self, merchant_id: str) -> List[TrackedEvent]:
        with self._lock:
            return [event for event in self._events if event.merchant_id == merchant_id]


class SqlEventRepository:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def add(self, event: TrackedEvent) -> TrackedEvent:
        with self.session_factory() as db, db.begin():
            db.add(
                MerchantEvent(
                    event_name=event.event_name,
                    merchant_id=event.merchant_id,
                    event_metadata=event.metadata,
                    occurred_at=event.occurred_at,
                )
            )
        return event

    def list_for_merchant(self, merchant_id: str) -> List[TrackedEvent]:
        """Events for a merchant, oldest first"""
        with self.session_factory() as db:
            records = db.scalars(
                select(MerchantEvent)
                .where(MerchantEvent.merchant_id == merchant_id)
                .order_by(MerchantEvent.id)
            ).all()
            return [
                TrackedEvent(
                    event_name=record.event_name,
                    merchant_id=record.merchant_id,
                    metadata=record.event_metadata or {},
                    occurred_at=record.occurred_at,
                )
                for record in records
            ]
