"""Frontend event tracking"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from revenue_gateway.domain.models import TrackedEvent
from revenue_gateway.infrastructure.database.repositories import EventRepository
from revenue_gateway.utils.date_utils import utc_now


class EventService:
    """
    Records funnel events sent by the merchant frontend.

    In demo mode events are only logged as "event_tracked"; otherwise they are
    appended to the event repository.
    """

    def __init__(self, repository: EventRepository, demo_mode: bool = False):
        self.repository = repository
        self.demo_mode = demo_mode

    def track(
        self,
        event_name: str,
        merchant_id: str,
        metadata: Optional[Dict[str, Any]] = None,
        occurred_at: Optional[datetime] = None,
    ) -> TrackedEvent:
        event = TrackedEvent(
            event_name=event_name,
            merchant_id=merchant_id,
            metadata=metadata or {},
            occurred_at=occurred_at or utc_now(),
        )

        if self.demo_mode:
            logging.info(
                "event_tracked",
                extra={"event_name": event_name, "merchant_id": merchant_id, "metadata": event.metadata},
            )
            return event

        return self.repository.add(event)
