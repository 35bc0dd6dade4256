"""Weighted revenue engine - core business logic for underwriting decisions"""

from revenue_gateway.domain.models import DecisionStatus, RevenueSignals
from revenue_gateway.utils.rounding import round_half_up


def listings_boost(places_score: int) -> float:
    """Google Places: up to +20% at a perfect signals score"""
    return 1 + (places_score / 100) * 0.20


def social_boost(facebook_fans: int | None, instagram_followers: int | None) -> float:
    """
    Community size on social platforms, additive across platforms.

    - Facebook:  +8% (>=5000 fans), +5% (>=1000), +2% (connected)
    - Instagram: +7% (>=5000 followers), +4% (>=1000), +1% (connected)
    """
    if facebook_fans is None:
        facebook = 0.0
    elif facebook_fans >= 5000:
        facebook = 0.08
    elif facebook_fans >= 1000:
        facebook = 0.05
    else:
        facebook = 0.02

    if instagram_followers is None:
        instagram = 0.0
    elif instagram_followers >= 5000:
        instagram = 0.07
    elif instagram_followers >= 1000:
        instagram = 0.04
    else:
        instagram = 0.01

    return 1 + facebook + instagram


def identity_boost(identity_match: bool | None) -> float:
    return 1.05 if identity_match is True else 1.0


def messaging_boost(whatsapp_business: bool | None) -> float:
    return 1.03 if whatsapp_business is True else 1.0


def sim_swap_penalty(sim_swap_detected: bool | None) -> float:
    """Recent SIM swap is a fraud signal: -10%"""
    return 0.90 if sim_swap_detected is True else 1.0


def bureau_multiplier(bureau_score: int | None) -> float:
    if bureau_score is None:
        return 1.0
    if bureau_score > 700:
        return 1.10
    elif bureau_score > 600:
        return 1.0
    return 0.90


def tenure_multiplier(tenure_months: int | None) -> float:
    if tenure_months is None:
        return 1.0
    if tenure_months > 24:
        return 1.05
    elif tenure_months < 6:
        return 0.95
    return 1.0


def compliance_multiplier(tax_compliance: bool) -> float:
    """Active SAT debt: -20%"""
    return 1.0 if tax_compliance else 0.80


def compute_total_revenue(signals: RevenueSignals) -> int:
    """
    Weighted monthly revenue presented to the analyst.

    The SAT monthly revenue is the only base; every other source applies a
    multiplicative factor that stays at 1.0 when its data is missing. Without
    a positive base the result is 0 regardless of the other sources.
    """
    if signals.monthly_revenue <= 0:
        return 0

    total = (
        signals.monthly_revenue
        * listings_boost(signals.places_score)
        * social_boost(signals.facebook_fans, signals.instagram_followers)
        * identity_boost(signals.identity_match)
        * messaging_boost(signals.whatsapp_business)
        * sim_swap_penalty(signals.sim_swap_detected)
        * bureau_multiplier(signals.bureau_score)
        * tenure_multiplier(signals.tenure_months)
        * compliance_multiplier(signals.tax_compliance)
    )
    return round_half_up(total)


def resolve_decision_status(total_revenue: int, threshold: int) -> DecisionStatus:
    """
    Map weighted revenue to a decision.

    - total >= threshold:      APPROVED
    - 0 < total < threshold:   MANUAL_REVIEW
    - total == 0:              REJECTED (no verifiable revenue)
    """
    if total_revenue <= 0:
        return DecisionStatus.REJECTED
    elif total_revenue >= threshold:
        return DecisionStatus.APPROVED
    return DecisionStatus.MANUAL_REVIEW
