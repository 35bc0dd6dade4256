"""Unit tests for weighted revenue and decision status"""

import pytest

from revenue_gateway.domain.models import DecisionStatus, RevenueSignals
from revenue_gateway.domain.scoring import (
    bureau_multiplier,
    compute_total_revenue,
    listings_boost,
    resolve_decision_status,
    social_boost,
    tenure_multiplier,
)


def test_total_revenue_reference_scenario():
    """60k base, places 72, bureau 720, 36 months tenure, compliant, no social/phone data"""
    signals = RevenueSignals(
        monthly_revenue=60_000,
        places_score=72,
        bureau_score=720,
        tenure_months=36,
        tax_compliance=True,
    )
    # 60000 x 1.144 x 1.10 x 1.05 = 79279.2
    total = compute_total_revenue(signals)
    assert total == 79_279
    assert resolve_decision_status(total, 50_000) == DecisionStatus.APPROVED


def test_total_revenue_zero_without_base():
    """Every other source favorable, but no SAT revenue"""
    signals = RevenueSignals(
        monthly_revenue=0,
        places_score=100,
        bureau_score=850,
        tenure_months=60,
        facebook_fans=50_000,
        instagram_followers=50_000,
        identity_match=True,
        whatsapp_business=True,
    )
    total = compute_total_revenue(signals)
    assert total == 0
    assert resolve_decision_status(total, 50_000) == DecisionStatus.REJECTED


def test_missing_signals_are_neutral():
    assert compute_total_revenue(RevenueSignals(monthly_revenue=40_000)) == 40_000


def test_social_boost_tiers():
    assert social_boost(None, None) == 1.0
    assert social_boost(5000, None) == pytest.approx(1.08)
    assert social_boost(1000, None) == pytest.approx(1.05)
    assert social_boost(10, None) == pytest.approx(1.02)
    assert social_boost(None, 5000) == pytest.approx(1.07)
    assert social_boost(None, 1000) == pytest.approx(1.04)
    assert social_boost(None, 0) == pytest.approx(1.01)
    assert social_boost(3200, 1850) == pytest.approx(1.09)


def test_phone_signals():
    base = RevenueSignals(monthly_revenue=100_000)
    with_identity = RevenueSignals(monthly_revenue=100_000, identity_match=True)
    with_whatsapp = RevenueSignals(monthly_revenue=100_000, whatsapp_business=True)
    with_swap = RevenueSignals(monthly_revenue=100_000, sim_swap_detected=True)
    no_swap = RevenueSignals(monthly_revenue=100_000, sim_swap_detected=False)

    assert compute_total_revenue(base) == 100_000
    assert compute_total_revenue(with_identity) == 105_000
    assert compute_total_revenue(with_whatsapp) == 103_000
    assert compute_total_revenue(with_swap) == 90_000
    assert compute_total_revenue(no_swap) == 100_000


def test_bureau_multiplier_bands():
    assert bureau_multiplier(None) == 1.0
    assert bureau_multiplier(701) == 1.10
    assert bureau_multiplier(700) == 1.0
    assert bureau_multiplier(601) == 1.0
    assert bureau_multiplier(600) == 0.90


def test_tenure_multiplier_bands():
    assert tenure_multiplier(None) == 1.0
    assert tenure_multiplier(25) == 1.05
    assert tenure_multiplier(24) == 1.0
    assert tenure_multiplier(6) == 1.0
    assert tenure_multiplier(5) == 0.95


def test_tax_debt_penalty():
    signals = RevenueSignals(monthly_revenue=50_000, tax_compliance=False)
    assert compute_total_revenue(signals) == 40_000


def test_listings_boost_max_twenty_percent():
    assert listings_boost(0) == 1.0
    assert listings_boost(100) == pytest.approx(1.20)


def test_better_bureau_score_never_lowers_revenue():
    for score_low in (300, 550, 600):
        low = RevenueSignals(monthly_revenue=75_000, places_score=40, bureau_score=score_low)
        high = RevenueSignals(monthly_revenue=75_000, places_score=40, bureau_score=710)
        assert compute_total_revenue(high) >= compute_total_revenue(low)


def test_total_revenue_is_deterministic():
    signals = RevenueSignals(
        monthly_revenue=61_234.5,
        places_score=58,
        bureau_score=640,
        tenure_months=4,
        facebook_fans=1200,
        instagram_followers=300,
        identity_match=True,
        sim_swap_detected=True,
    )
    assert compute_total_revenue(signals) == compute_total_revenue(signals)
    assert compute_total_revenue(signals) >= 0


def test_decision_status_boundaries():
    assert resolve_decision_status(50_000, 50_000) == DecisionStatus.APPROVED
    assert resolve_decision_status(49_999, 50_000) == DecisionStatus.MANUAL_REVIEW
    assert resolve_decision_status(1, 50_000) == DecisionStatus.MANUAL_REVIEW
    assert resolve_decision_status(0, 50_000) == DecisionStatus.REJECTED


@pytest.mark.parametrize("monthly_revenue", [-10_000, -0.5])
def test_negative_base_gives_zero(monthly_revenue):
    signals = RevenueSignals(
        monthly_revenue=monthly_revenue,
        places_score=80,
        bureau_score=720,
        tenure_months=36,
        identity_match=True,
    )
    total = compute_total_revenue(signals)
    assert total == 0
    assert resolve_decision_status(total, 50_000) == DecisionStatus.REJECTED


def test_total_revenue_never_negative():
    for monthly_revenue in (-120_000, -1, 0, 1, 45_000):
        for bureau_score in (None, 350, 650, 800):
            for tenure_months in (None, 2, 12, 48):
                for tax_compliance in (True, False):
                    signals = RevenueSignals(
                        monthly_revenue=monthly_revenue,
                        bureau_score=bureau_score,
                        tenure_months=tenure_months,
                        tax_compliance=tax_compliance,
                        sim_swap_detected=True,
                    )
                    assert compute_total_revenue(signals) >= 0
