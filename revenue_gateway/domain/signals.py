"""Public listing signals score (Google Places)"""

from revenue_gateway.domain.models import PlacesResult

# Category keywords that indicate a real storefront rather than a home address
COMMERCIAL_KEYWORDS = ("restaurant", "food", "store", "bakery", "cafe", "bar", "supermarket", "pharmacy")


def _rating_points(rating: float | None) -> int:
    if not rating:
        return 0
    if rating >= 4.5:
        return 25
    elif rating >= 4.0:
        return 20
    elif rating >= 3.5:
        return 12
    return 5


def _review_points(review_count: int | None) -> int:
    if not review_count:
        return 0
    if review_count >= 200:
        return 20
    elif review_count >= 100:
        return 15
    elif review_count >= 50:
        return 10
    elif review_count >= 10:
        return 5
    return 0


def has_commercial_category(categories: list[str] | None) -> bool:
    """True when any listing category mentions a commercial keyword"""
    return any(
        keyword in category.lower()
        for category in categories or []
        for keyword in COMMERCIAL_KEYWORDS
    )


def compute_signals_score(listing: PlacesResult) -> int:
    """
    Composite 0-100 score from public listing attributes.

    Weights:
    - 25: Rating (operational quality)
    - 20: Review volume (business scale)
    - 10: Verified listing
    - 10: Has website (formality signal)
    - 10: Business is operational
    - 10: Commercial category
    -  5: Price level 3-4 (higher average ticket)
    """
    score = _rating_points(listing.rating) + _review_points(listing.total_review_count)

    if listing.is_verified:
        score += 10
    if listing.has_website:
        score += 10
    if listing.business_status == "OPERATIONAL":
        score += 10
    if has_commercial_category(listing.categories):
        score += 10
    if listing.price_level_index and listing.price_level_index >= 3:
        score += 5

    return min(score, 100)
