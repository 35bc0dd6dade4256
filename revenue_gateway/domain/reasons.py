"""Human-readable decision reason for the analyst"""

from typing import Iterable

from revenue_gateway.domain.models import DataSource, DecisionStatus, RevenueSignals

HEADLINES = {
    DecisionStatus.APPROVED: "Weighted revenue meets the approval threshold.",
    DecisionStatus.MANUAL_REVIEW: "Application under manual review to determine the new credit amount.",
    DecisionStatus.REJECTED: "No verifiable revenue; application rejected.",
}

SOURCE_LABELS = {
    DataSource.SYNTAGE: "SAT revenue",
    DataSource.GOOGLE_PLACES: "Google Places",
    DataSource.FACEBOOK: "Facebook",
    DataSource.INSTAGRAM: "Instagram",
    DataSource.TWILIO: "Twilio Lookup",
    DataSource.BUREAU: "Credit bureau",
    DataSource.PLATFORM: "Platform",
}


def _money(amount: float) -> str:
    return f"${amount:,.0f} MXN"


def build_reason(
    status: DecisionStatus,
    signals: RevenueSignals,
    available: Iterable[str],
    platform_gmv: float | None = None,
) -> str:
    """One sentence per source; sources that returned nothing are named explicitly"""
    available = {DataSource(source) for source in available}
    parts = [HEADLINES[status]]

    if DataSource.SYNTAGE in available:
        sentence = f"SAT revenue: {_money(signals.monthly_revenue)}/month."
        if not signals.tax_compliance:
            sentence += " Active SAT tax debt detected."
        parts.append(sentence)
    else:
        parts.append("SAT data unavailable; requires manual verification.")

    if DataSource.GOOGLE_PLACES in available:
        parts.append(f"Google Places score: {signals.places_score}/100.")
    if DataSource.FACEBOOK in available and signals.facebook_fans is not None:
        parts.append(f"Facebook: {signals.facebook_fans:,} followers.")
    if DataSource.INSTAGRAM in available and signals.instagram_followers is not None:
        parts.append(f"Instagram: {signals.instagram_followers:,} followers.")

    if DataSource.TWILIO in available:
        notes = []
        if signals.identity_match is True:
            notes.append("identity verified")
        if signals.whatsapp_business is True:
            notes.append("WhatsApp Business active")
        if signals.sim_swap_detected is True:
            notes.append("recent SIM swap detected")
        if notes:
            parts.append(f"Twilio Lookup: {', '.join(notes)}.")

    if DataSource.BUREAU in available and signals.bureau_score is not None:
        parts.append(f"Credit bureau score: {signals.bureau_score}/850.")
    if DataSource.PLATFORM in available and platform_gmv is not None:
        parts.append(f"Platform GMV: {_money(platform_gmv)}/month.")

    missing = [SOURCE_LABELS[source] for source in DataSource if source not in available and source != DataSource.SYNTAGE]
    if missing:
        parts.append(f"Unavailable: {', '.join(missing)}.")

    return " ".join(parts)
