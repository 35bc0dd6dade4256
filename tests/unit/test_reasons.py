"""Unit tests for the analyst-facing decision reason"""

from revenue_gateway.domain.models import DecisionStatus, RevenueSignals
from revenue_gateway.domain.reasons import build_reason


def test_reason_names_every_missing_source_when_nothing_is_available():
    reason = build_reason(DecisionStatus.REJECTED, RevenueSignals(), [])

    assert reason.startswith("No verifiable revenue")
    assert "SAT data unavailable" in reason
    for label in ("Google Places", "Facebook", "Instagram", "Twilio Lookup", "Credit bureau", "Platform"):
        assert label in reason


def test_reason_summarizes_available_sources():
    signals = RevenueSignals(
        monthly_revenue=60_000,
        places_score=72,
        bureau_score=720,
        tax_compliance=False,
        facebook_fans=3200,
        identity_match=True,
        sim_swap_detected=True,
    )
    reason = build_reason(
        DecisionStatus.APPROVED,
        signals,
        ["syntage", "google_places", "facebook", "twilio", "bureau", "platform"],
        platform_gmv=900_000,
    )

    assert "SAT revenue: $60,000 MXN/month." in reason
    assert "Active SAT tax debt detected." in reason
    assert "Google Places score: 72/100." in reason
    assert "Facebook: 3,200 followers." in reason
    assert "identity verified" in reason
    assert "recent SIM swap detected" in reason
    assert "Credit bureau score: 720/850." in reason
    assert "Platform GMV: $900,000 MXN/month." in reason
    assert reason.endswith("Unavailable: Instagram.")
