"""Credit offer generation: amount tiers, monthly rate and repayment split"""

from revenue_gateway.domain.models import CreditOffer, PrequalificationResult
from revenue_gateway.utils.rounding import round_half_up, round_to_thousand

BUREAU_TIER_MULTIPLIER = 1.2
SOCIAL_TIER_MULTIPLIER = 1.4
FISCAL_TIER_MULTIPLIER = 2.0

DEFAULT_INSTALLMENTS = 12
WITHHOLDING_SHARE = 0.20  # Portion of each payment retained from platform sales


def tier_multiplier(has_social: bool, has_fiscal: bool) -> float:
    """Fiscal data unlocks the top tier, social presence the middle one, bureau alone the floor"""
    if has_fiscal:
        return FISCAL_TIER_MULTIPLIER
    elif has_social:
        return SOCIAL_TIER_MULTIPLIER
    return BUREAU_TIER_MULTIPLIER


def monthly_rate(bureau_score: int | None) -> float:
    if bureau_score is not None and bureau_score > 700:
        return 0.030
    elif bureau_score is not None and bureau_score > 600:
        return 0.034
    return 0.038


def annuity_payment(amount: float, rate: float, installments: int) -> int:
    """
    Fixed monthly payment that amortizes `amount` over `installments` periods.

    payment = amount * rate / (1 - (1 + rate) ** -installments)
    """
    if amount <= 0:
        return 0
    if rate == 0:
        return round_half_up(amount / installments)
    return round_half_up(amount * rate / (1 - (1 + rate) ** -installments))


def compute_credit_offer(
    base_amount: float,
    bureau_score: int | None,
    source_count: int,
    has_social: bool = False,
    has_fiscal: bool = False,
    installments: int = DEFAULT_INSTALLMENTS,
) -> CreditOffer:
    """
    Build the credit offer from the platform pre-approved base.

    Multipliers are fixed, the base varies per merchant:
    - bureau only:              base x 1.2
    - bureau + social:          base x 1.4
    - bureau + social + fiscal: base x 2.0

    Repayment: 20% withheld from platform sales, the remainder by direct
    debit. The direct debit is derived by subtraction so both parts always
    add up to the monthly payment.

    `source_count` does not change the tier; only the social/fiscal flags do.
    """
    approved_amount = round_to_thousand(base_amount * tier_multiplier(has_social, has_fiscal))
    rate = monthly_rate(bureau_score)
    payment = annuity_payment(approved_amount, rate, installments)

    withholding = round_half_up(payment * WITHHOLDING_SHARE)
    direct_debit = payment - withholding

    return CreditOffer(
        approved_amount=approved_amount,
        interest_rate_monthly=rate,
        installments=installments,
        monthly_payment=payment,
        withholding_amount=withholding,
        direct_debit_amount=direct_debit,
    )


def compute_prequalification(base_amount: float) -> PrequalificationResult:
    """Tier offers shown before the merchant connects any data source"""
    return PrequalificationResult(
        base_amount=base_amount,
        bureau_offer=round_to_thousand(base_amount * BUREAU_TIER_MULTIPLIER),
        social_offer=round_to_thousand(base_amount * SOCIAL_TIER_MULTIPLIER),
        fiscal_offer=round_to_thousand(base_amount * FISCAL_TIER_MULTIPLIER),
    )
