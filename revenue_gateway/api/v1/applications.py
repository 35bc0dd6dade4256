"""Merchant application endpoints: create, read, submit, consent, prequalification"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from revenue_gateway.api.dependencies import get_application_service, get_request_id
from revenue_gateway.api.v1.schemas import (
    ConsentRequest,
    CreateApplicationRequest,
    MessageResponse,
    PrequalificationResponse,
    SubmitApplicationRequest,
    SubmitApplicationResponse,
)
from revenue_gateway.domain.exceptions import ApplicationNotFoundError
from revenue_gateway.domain.models import Application
from revenue_gateway.infrastructure.database.repositories import to_document
from revenue_gateway.services.applications import ApplicationService

router = APIRouter()

# OAuth tokens are stored for underwriting but never echoed back
PRIVATE_FORM_FIELDS = ("facebook_access_token", "instagram_access_token")


def serialize_application(application: Application) -> Dict[str, Any]:
    document = to_document(application)
    form_data = document.get("form_data")
    if form_data:
        for name in PRIVATE_FORM_FIELDS:
            form_data.pop(name, None)
    return document


def not_found(e: ApplicationNotFoundError, request_id: str) -> HTTPException:
    logging.warning(str(e), extra={"request_id": request_id, "application_id": e.application_id})
    return HTTPException(status_code=404, detail="Application not found")


@router.post("/applications", status_code=201)
def create_application(
    request_body: CreateApplicationRequest,
    service: ApplicationService = Depends(get_application_service),
):
    """Open a new application in UNDERWRITING_PENDING"""
    application = service.create_application(request_body.merchant_id)
    return serialize_application(application)


@router.get("/applications/{application_id}")
def get_application(
    application_id: str,
    request: Request,
    service: ApplicationService = Depends(get_application_service),
):
    try:
        application = service.get_application(application_id)
    except ApplicationNotFoundError as e:
        raise not_found(e, get_request_id(request))
    return serialize_application(application)


@router.post("/applications/{application_id}/submit", response_model=SubmitApplicationResponse)
async def submit_application(
    application_id: str,
    request_body: SubmitApplicationRequest,
    request: Request,
    service: ApplicationService = Depends(get_application_service),
):
    """
    Submit the merchant form and run underwriting.

    Flow:
    1. Fetch the seven data sources (failures degrade to "unavailable")
    2. Compute weighted revenue, status and credit offer
    3. Persist the decision payload and source results on the application
    """
    request_id = get_request_id(request)

    try:
        application = await service.submit_application(application_id, request_body.form_data.to_domain())
    except ApplicationNotFoundError as e:
        raise not_found(e, request_id)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id}, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")

    return SubmitApplicationResponse(
        id=application.id,
        status=application.decision_status.value,
        message="Application submitted and underwriting completed",
    )


@router.post("/applications/{application_id}/consent", response_model=MessageResponse)
def update_consent(
    application_id: str,
    request_body: ConsentRequest,
    request: Request,
    service: ApplicationService = Depends(get_application_service),
):
    try:
        service.update_consent(
            application_id,
            bureau_consent=request_body.bureau_consent,
            twilio_consent=request_body.twilio_consent,
            data_processing_consent=request_body.data_processing_consent,
        )
    except ApplicationNotFoundError as e:
        raise not_found(e, get_request_id(request))
    return MessageResponse(message="Consent recorded")


@router.get("/applications/{application_id}/prequalification", response_model=PrequalificationResponse)
async def prequalify(
    application_id: str,
    request: Request,
    service: ApplicationService = Depends(get_application_service),
):
    """Tier offers from the platform pre-approved amount, without running underwriting"""
    try:
        result = await service.prequalify(application_id)
    except ApplicationNotFoundError as e:
        raise not_found(e, get_request_id(request))

    return PrequalificationResponse(
        base_amount=result.base_amount,
        bureau_offer=result.bureau_offer,
        social_offer=result.social_offer,
        fiscal_offer=result.fiscal_offer,
    )
