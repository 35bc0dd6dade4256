"""Frontend event tracking endpoint"""

from fastapi import APIRouter, Depends, Response

from revenue_gateway.api.dependencies import get_event_service
from revenue_gateway.api.v1.schemas import TrackEventRequest
from revenue_gateway.services.events import EventService

router = APIRouter()


@router.post("/events", status_code=204, response_class=Response)
def track_event(
    request_body: TrackEventRequest,
    service: EventService = Depends(get_event_service),
):
    service.track(
        request_body.event_name,
        request_body.merchant_id,
        metadata=request_body.metadata,
        occurred_at=request_body.timestamp,
    )
    return Response(status_code=204)
