"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from revenue_gateway.domain.models import FormData


class CreateApplicationRequest(BaseModel):
    """Request body for POST /v1/applications"""

    merchant_id: str = Field(..., min_length=1, description="Merchant identifier")


class FormDataSchema(BaseModel):
    """Merchant form submitted for underwriting"""

    legal_name: str = Field(..., min_length=2, max_length=200)
    tax_id: str = Field("", pattern=r"^(.{12,13})?$", description="RFC: 12 chars (company) or 13 (individual)")
    ciec: str = Field("", pattern=r"^(.{8,20})?$")
    address: str = Field(..., min_length=5, max_length=500)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    consent_given: Literal[True]
    phone: Optional[str] = Field(None, max_length=20)
    google_business_url: Optional[str] = Field(None, description="Public Google Maps URL of the business")
    facebook_access_token: Optional[str] = None
    instagram_access_token: Optional[str] = None

    def to_domain(self) -> FormData:
        return FormData(**self.model_dump())


class SubmitApplicationRequest(BaseModel):
    """Request body for POST /v1/applications/{id}/submit"""

    form_data: FormDataSchema


class SubmitApplicationResponse(BaseModel):
    id: str
    status: str
    message: str


class ConsentRequest(BaseModel):
    """Request body for POST /v1/applications/{id}/consent"""

    bureau_consent: Literal[True]
    twilio_consent: Literal[True]
    data_processing_consent: Literal[True]


class MessageResponse(BaseModel):
    message: str


class PrequalificationResponse(BaseModel):
    """Response for GET /v1/applications/{id}/prequalification"""

    base_amount: float
    bureau_offer: int
    social_offer: int
    fiscal_offer: int


class TrackEventRequest(BaseModel):
    """Request body for POST /v1/events"""

    event_name: str = Field(..., min_length=1, max_length=100)
    merchant_id: str = Field(..., min_length=1)
    metadata: Optional[Dict[str, Any]] = None
    timestamp: Optional[datetime] = Field(None, description="Client-side time of the event")
