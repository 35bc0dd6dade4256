"""Application lifecycle: create, submit for underwriting, consent, prequalification"""

import logging
import uuid
from dataclasses import replace

from revenue_gateway.domain.exceptions import ApplicationNotFoundError
from revenue_gateway.domain.models import (
    Application,
    ConsentData,
    FormData,
    PrequalificationResult,
)
from revenue_gateway.infrastructure.database.repositories import ApplicationRepository
from revenue_gateway.services.underwriting import UnderwritingService
from revenue_gateway.utils.date_utils import utc_now


class ApplicationService:
    """Reads and writes applications through the repository; underwriting is delegated"""

    def __init__(self, repository: ApplicationRepository, underwriting: UnderwritingService):
        self.repository = repository
        self.underwriting = underwriting

    def create_application(self, merchant_id: str) -> Application:
        now = utc_now()
        application = Application(
            id=str(uuid.uuid4()),
            merchant_id=merchant_id,
            created_at=now,
            updated_at=now,
        )
        self.repository.create(application)
        logging.info("application_created", extra={"application_id": application.id, "merchant_id": merchant_id})
        return application

    def get_application(self, application_id: str) -> Application:
        application = self.repository.get(application_id)
        if application is None:
            raise ApplicationNotFoundError(application_id)
        return application

    async def submit_application(self, application_id: str, form_data: FormData) -> Application:
        """
        Run underwriting on the submitted form and store the outcome.

        Resubmission runs a new underwriting and overwrites the previous
        status, payload and source results in a single update.
        """
        application = replace(self.get_application(application_id), form_data=form_data)
        decision = await self.underwriting.run_underwriting(application)

        updated = replace(
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
            updated_at=utc_now(),
        )
        self.repository.update(updated)
        logging.info(
            "application_submitted",
            extra={"application_id": application_id, "status": decision.status.value},
        )
        return updated

    def update_consent(
        self,
        application_id: str,
        bureau_consent: bool,
        twilio_consent: bool,
        data_processing_consent: bool,
    ) -> Application:
        application = self.get_application(application_id)
        updated = replace(
            application,
            consent_data=ConsentData(
                bureau_consent=bureau_consent,
                twilio_consent=twilio_consent,
                data_processing_consent=data_processing_consent,
            ),
            updated_at=utc_now(),
        )
        self.repository.update(updated)
        logging.info("consent_updated", extra={"application_id": application_id})
        return updated

    async def prequalify(self, application_id: str) -> PrequalificationResult:
        application = self.get_application(application_id)
        return await self.underwriting.run_prequalification(application.merchant_id)
