"""Underwriting orchestration: fetch every data source, score, decide, price the offer"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Tuple, cast

from revenue_gateway.domain.models import (
    Application,
    BureauResult,
    DataSource,
    DecisionPayload,
    FacebookResult,
    FormData,
    InstagramResult,
    PlacesResult,
    PlatformResult,
    PrequalificationResult,
    RevenueSignals,
    SourceQuery,
    SourceResult,
    SyntageResult,
    TwilioResult,
    UnderwritingDecision,
)
from revenue_gateway.domain.offers import compute_credit_offer, compute_prequalification
from revenue_gateway.domain.reasons import build_reason
from revenue_gateway.domain.scoring import compute_total_revenue, resolve_decision_status
from revenue_gateway.infrastructure.clients.base import SourceAdapter
from revenue_gateway.infrastructure.clients.factory import SourceAdapters
from revenue_gateway.infrastructure.observability.logging import log_underwriting_completed
from revenue_gateway.infrastructure.observability.metrics import record_decision, record_source_fetch

# Fields echoed in the "<source>_data_fetched" log line
LOGGED_FIELDS = {
    DataSource.SYNTAGE: ("annual_revenue", "monthly_revenue", "months_active"),
    DataSource.GOOGLE_PLACES: ("business_name", "rating", "signals_score"),
    DataSource.FACEBOOK: ("page_name", "fan_count"),
    DataSource.INSTAGRAM: ("username", "followers_count"),
    DataSource.TWILIO: ("identity_match", "whatsapp_business", "sim_swap_detected"),
    DataSource.BUREAU: ("bureau_score",),
    DataSource.PLATFORM: ("avg_platform_gmv_6m", "tenure_months", "pre_approved_amount"),
}


def build_source_query(application: Application) -> SourceQuery:
    """Identifying fields for the adapters; the legal name is split into first name and the rest"""
    form = application.form_data or FormData()
    name_parts = form.legal_name.split()
    return SourceQuery(
        merchant_id=application.merchant_id,
        tax_id=form.tax_id or "",
        phone=form.phone or "",
        first_name=name_parts[0] if name_parts else "",
        last_name=" ".join(name_parts[1:]),
        listing_url=form.google_business_url or "",
        facebook_token=form.facebook_access_token or "",
        instagram_token=form.instagram_access_token or "",
    )


def extract_revenue_signals(results: Dict[DataSource, SourceResult]) -> RevenueSignals:
    """Only available sources contribute; everything else stays neutral"""
    syntage = cast(SyntageResult, results[DataSource.SYNTAGE])
    places = cast(PlacesResult, results[DataSource.GOOGLE_PLACES])
    facebook = cast(FacebookResult, results[DataSource.FACEBOOK])
    instagram = cast(InstagramResult, results[DataSource.INSTAGRAM])
    twilio = cast(TwilioResult, results[DataSource.TWILIO])
    bureau = cast(BureauResult, results[DataSource.BUREAU])
    platform = cast(PlatformResult, results[DataSource.PLATFORM])

    return RevenueSignals(
        monthly_revenue=(syntage.monthly_revenue or 0) if syntage.available else 0,
        places_score=(places.signals_score or 0) if places.available else 0,
        bureau_score=bureau.bureau_score if bureau.available else None,
        tenure_months=platform.tenure_months if platform.available else None,
        tax_compliance=syntage.tax_compliance if syntage.available else True,
        facebook_fans=facebook.fan_count if facebook.available else None,
        instagram_followers=instagram.followers_count if instagram.available else None,
        identity_match=twilio.identity_match if twilio.available else None,
        whatsapp_business=twilio.whatsapp_business if twilio.available else None,
        sim_swap_detected=twilio.sim_swap_detected if twilio.available else None,
    )


class UnderwritingService:
    """
    Runs the underwriting pipeline for one application.

    Sources are fetched in a fixed order (syntage, google_places, facebook,
    instagram, twilio, bureau, platform), each bounded by its own timeout.
    A source that fails, times out or lacks input yields its unavailable
    sentinel and the remaining sources are still attempted, so a run always
    completes with a status.

    With parallel_fetch the seven calls run concurrently; results are still
    collected positionally, so data_sources keeps the same order.
    """

    def __init__(
        self,
        adapters: SourceAdapters,
        approval_threshold: int,
        default_pre_approved_amount: float = 50_000,
        parallel_fetch: bool = False,
    ):
        self.adapters = adapters
        self.approval_threshold = approval_threshold
        self.default_pre_approved_amount = default_pre_approved_amount
        self.parallel_fetch = parallel_fetch

    async def fetch_source(
        self,
        source: DataSource,
        adapter: SourceAdapter,
        query: SourceQuery,
        log_ctx: Dict[str, Any],
    ) -> SourceResult:
        """Call one adapter under its timeout; never raises"""
        timeout = self.adapters.timeout_for(source)
        start_time = time.perf_counter()

        try:
            # wait_for cancels the adapter call when the deadline passes
            result = await asyncio.wait_for(adapter.fetch(query), timeout=timeout)
        except asyncio.TimeoutError:
            logging.warning(
                f"{source.value}_fetch_failed",
                extra={**log_ctx, "source": source.value, "error": f"timed out after {timeout}s"},
            )
            outcome = "timeout"
            result = adapter.result_type.unavailable()
        except Exception as e:
            logging.warning(
                f"{source.value}_fetch_failed",
                extra={**log_ctx, "source": source.value, "error": str(e)},
                exc_info=True,
            )
            outcome = "error"
            result = adapter.result_type.unavailable()
        else:
            outcome = "available" if result.available else "unavailable"
            if result.available:
                fields = {name: getattr(result, name, None) for name in LOGGED_FIELDS[source]}
                logging.info(f"{source.value}_data_fetched", extra={**log_ctx, **fields})

        record_source_fetch(source.value, outcome, time.perf_counter() - start_time)
        return result

    async def collect_results(self, query: SourceQuery, log_ctx: Dict[str, Any]) -> Dict[DataSource, SourceResult]:
        ordered: List[Tuple[DataSource, SourceAdapter]] = self.adapters.in_order()

        if self.parallel_fetch:
            results = await asyncio.gather(
                *(self.fetch_source(source, adapter, query, log_ctx) for source, adapter in ordered)
            )
        else:
            results = []
            for source, adapter in ordered:
                results.append(await self.fetch_source(source, adapter, query, log_ctx))

        return {source: result for (source, _), result in zip(ordered, results)}

    async def run_underwriting(self, application: Application) -> UnderwritingDecision:
        """
        Main entry point: fetch all sources and produce status, payload and results.

        Flow:
        1. Fetch the seven sources (each isolated by timeout and error handling)
        2. Weighted revenue from the available signals
        3. Credit offer from the platform pre-approved base and tier flags
        4. Status from the approval threshold
        """
        start_time = time.time()
        log_ctx = {"application_id": application.id, "merchant_id": application.merchant_id}
        logging.info("underwriting_started", extra=log_ctx)

        results = await self.collect_results(build_source_query(application), log_ctx)
        syntage = cast(SyntageResult, results[DataSource.SYNTAGE])
        places = cast(PlacesResult, results[DataSource.GOOGLE_PLACES])
        facebook = cast(FacebookResult, results[DataSource.FACEBOOK])
        instagram = cast(InstagramResult, results[DataSource.INSTAGRAM])
        twilio = cast(TwilioResult, results[DataSource.TWILIO])
        bureau = cast(BureauResult, results[DataSource.BUREAU])
        platform = cast(PlatformResult, results[DataSource.PLATFORM])

        data_sources = [source.value for source in DataSource if results[source].available]
        signals = extract_revenue_signals(results)
        total_revenue = compute_total_revenue(signals)
        status = resolve_decision_status(total_revenue, self.approval_threshold)

        pre_approved_base = (
            platform.pre_approved_amount
            if platform.available and platform.pre_approved_amount
            else self.default_pre_approved_amount
        )
        credit_offer = compute_credit_offer(
            pre_approved_base,
            signals.bureau_score,
            len(data_sources),
            has_social=places.available or facebook.available or instagram.available,
            has_fiscal=syntage.available,
        )

        platform_gmv = platform.avg_platform_gmv_6m if platform.available else None
        payload = DecisionPayload(
            reason=build_reason(status, signals, data_sources, platform_gmv),
            total_revenue=total_revenue,
            threshold_used=self.approval_threshold,
            data_sources=data_sources,
            syntage_monthly_revenue=signals.monthly_revenue,
            syntage_tax_compliance=signals.tax_compliance,
            syntage_cfdi_count=syntage.cfdi_count_last_12m,
            syntage_tax_regime=syntage.tax_regime,
            places_signals_score=signals.places_score,
            places_rating=places.rating,
            places_review_count=places.total_review_count,
            facebook_fan_count=signals.facebook_fans,
            facebook_rating=facebook.rating,
            instagram_followers=signals.instagram_followers,
            instagram_media_count=instagram.media_count,
            twilio_identity_match=signals.identity_match,
            twilio_whatsapp_business=signals.whatsapp_business,
            twilio_sim_swap_detected=signals.sim_swap_detected,
            twilio_line_type=twilio.line_type,
            bureau_score=signals.bureau_score,
            platform_gmv_6m=platform_gmv,
            platform_tenure_months=signals.tenure_months,
            credit_offer=credit_offer,
        )

        duration_ms = (time.time() - start_time) * 1000
        record_decision(status.value, credit_offer.approved_amount)
        log_underwriting_completed(
            application.id,
            application.merchant_id,
            status.value,
            total_revenue,
            data_sources,
            duration_ms,
        )

        return UnderwritingDecision(
            status=status,
            payload=payload,
            syntage_result=syntage,
            places_result=places,
            facebook_result=facebook,
            instagram_result=instagram,
            twilio_result=twilio,
            bureau_result=bureau,
            platform_result=platform,
        )

    async def run_prequalification(self, merchant_id: str) -> PrequalificationResult:
        """Tier offers from the platform pre-approved amount only; falls back to the default base"""
        log_ctx = {"merchant_id": merchant_id}
        platform = cast(
            PlatformResult,
            await self.fetch_source(
                DataSource.PLATFORM,
                self.adapters.platform,
                SourceQuery(merchant_id=merchant_id),
                log_ctx,
            ),
        )

        base_amount = platform.pre_approved_amount or self.default_pre_approved_amount
        result = compute_prequalification(base_amount)

        logging.info(
            "prequal_completed",
            extra={
                **log_ctx,
                "base_amount": result.base_amount,
                "bureau_offer": result.bureau_offer,
                "social_offer": result.social_offer,
                "fiscal_offer": result.fiscal_offer,
            },
        )
        return result
