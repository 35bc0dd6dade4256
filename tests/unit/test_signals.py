"""Unit tests for the Google Places signals score"""

from revenue_gateway.domain.models import PlacesResult
from revenue_gateway.domain.signals import compute_signals_score, has_commercial_category


def test_signals_score_full_marks():
    """Every signal at its best tier: 25 + 20 + 10 + 10 + 10 + 10 + 5"""
    listing = PlacesResult(
        connected=True,
        rating=4.8,
        total_review_count=500,
        is_verified=True,
        has_website=True,
        business_status="OPERATIONAL",
        categories=["bakery"],
        price_level_index=4,
    )
    assert compute_signals_score(listing) == 90


def test_signals_score_rating_tiers():
    assert compute_signals_score(PlacesResult(connected=True, rating=4.5)) == 25
    assert compute_signals_score(PlacesResult(connected=True, rating=4.0)) == 20
    assert compute_signals_score(PlacesResult(connected=True, rating=3.5)) == 12
    assert compute_signals_score(PlacesResult(connected=True, rating=2.1)) == 5
    assert compute_signals_score(PlacesResult(connected=True, rating=None)) == 0


def test_signals_score_review_tiers():
    assert compute_signals_score(PlacesResult(connected=True, total_review_count=200)) == 20
    assert compute_signals_score(PlacesResult(connected=True, total_review_count=100)) == 15
    assert compute_signals_score(PlacesResult(connected=True, total_review_count=50)) == 10
    assert compute_signals_score(PlacesResult(connected=True, total_review_count=10)) == 5
    assert compute_signals_score(PlacesResult(connected=True, total_review_count=9)) == 0


def test_signals_score_demo_listing():
    """Mid-tier rating, high review volume, no premium pricing"""
    listing = PlacesResult(
        connected=True,
        rating=3.9,
        total_review_count=214,
        is_verified=True,
        has_website=True,
        business_status="OPERATIONAL",
        categories=["Mexican restaurant", "Taquería"],
        price_level_index=2,
    )
    # 12 + 20 + 10 + 10 + 10 + 10
    assert compute_signals_score(listing) == 72


def test_signals_score_closed_business_gets_no_status_points():
    listing = PlacesResult(connected=True, business_status="CLOSED_TEMPORARILY", price_level_index=3)
    assert compute_signals_score(listing) == 5


def test_commercial_category_case_insensitive():
    assert has_commercial_category(["Corner STORE"]) is True
    assert has_commercial_category(["lodging", "point_of_interest"]) is False
    assert has_commercial_category(None) is False


def test_signals_score_always_in_range():
    for rating in (None, 1.0, 3.6, 4.1, 4.9):
        for reviews in (None, 0, 12, 60, 150, 999):
            for flag in (None, False, True):
                listing = PlacesResult(
                    connected=True,
                    rating=rating,
                    total_review_count=reviews,
                    is_verified=flag,
                    has_website=flag,
                    business_status="OPERATIONAL" if flag else None,
                    categories=["cafe"] if flag else [],
                    price_level_index=4 if flag else 1,
                )
                assert 0 <= compute_signals_score(listing) <= 100
