"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from revenue_gateway.utils.date_utils import utc_now


class DecisionStatus(str, Enum):
    """Lifecycle status of an application; everything but PENDING is terminal per run"""

    UNDERWRITING_PENDING = "UNDERWRITING_PENDING"
    APPROVED = "APPROVED"
    MANUAL_REVIEW = "MANUAL_REVIEW"
    REJECTED = "REJECTED"


class DataSource(str, Enum):
    """External data providers, declared in underwriting fetch order"""

    SYNTAGE = "syntage"
    GOOGLE_PLACES = "google_places"
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TWILIO = "twilio"
    BUREAU = "bureau"
    PLATFORM = "platform"


@dataclass(frozen=True)
class FormData:
    """Merchant-submitted application form"""

    legal_name: str = ""
    tax_id: str = ""  # RFC
    ciec: str = ""
    address: str = ""
    email: str = ""
    consent_given: bool = False
    phone: Optional[str] = None
    google_business_url: Optional[str] = None
    facebook_access_token: Optional[str] = None
    instagram_access_token: Optional[str] = None


@dataclass(frozen=True)
class ConsentData:
    bureau_consent: bool
    twilio_consent: bool
    data_processing_consent: bool
    consented_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class SourceQuery:
    """Identifying input handed to every source adapter"""

    merchant_id: str
    tax_id: str = ""
    phone: str = ""
    first_name: str = ""
    last_name: str = ""
    listing_url: str = ""
    facebook_token: str = ""
    instagram_token: str = ""


# --- Source results ---------------------------------------------------------


@dataclass(frozen=True)
class SourceResult:
    """Common shape of every provider result; connected=False is the unavailable sentinel"""

    connected: bool = False
    fetched_at: datetime = field(default_factory=utc_now)

    @classmethod
    def unavailable(cls):
        return cls(connected=False)

    @property
    def available(self) -> bool:
        return self.connected


@dataclass(frozen=True)
class SyntageResult(SourceResult):
    """SAT revenue registry data via Syntage"""

    merchant_id: Optional[str] = None
    annual_revenue: Optional[float] = None
    monthly_revenue: Optional[float] = None
    months_active: Optional[int] = None
    tax_regime: Optional[str] = None
    cfdi_count_last_12m: Optional[int] = None
    tax_compliance: bool = True  # False = active debt with SAT
    raw_response: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlacesResult(SourceResult):
    """Public Google Maps listing"""

    place_id: Optional[str] = None
    business_name: Optional[str] = None
    rating: Optional[float] = None  # 1.0-5.0
    total_review_count: Optional[int] = None
    rating_trend_3m: Optional[float] = None
    listing_age_years: Optional[int] = None
    location_count: Optional[int] = None
    price_level_index: Optional[int] = None  # 1-4
    is_verified: Optional[bool] = None
    categories: List[str] = field(default_factory=list)
    has_website: Optional[bool] = None
    business_status: Optional[str] = None  # OPERATIONAL / CLOSED_TEMPORARILY / ...
    signals_score: Optional[int] = None  # 0-100


@dataclass(frozen=True)
class FacebookResult(SourceResult):
    page_name: Optional[str] = None
    fan_count: Optional[int] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    is_verified: Optional[bool] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class InstagramResult(SourceResult):
    username: Optional[str] = None
    followers_count: Optional[int] = None
    media_count: Optional[int] = None
    is_business: Optional[bool] = None


@dataclass(frozen=True)
class TwilioResult(SourceResult):
    """Carrier intelligence from Twilio Lookup; flags are tri-state (None = no data)"""

    phone_number: Optional[str] = None
    identity_match: Optional[bool] = None
    name_match_score: Optional[str] = None  # high | medium | low | no_data
    whatsapp_business: Optional[bool] = None
    line_type: Optional[str] = None  # mobile | landline | voip | toll_free
    sim_swap_detected: Optional[bool] = None
    carrier_name: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class BureauResult(SourceResult):
    bureau_score: Optional[int] = None  # 300-850
    active_debt_amount: Optional[float] = None

    @property
    def available(self) -> bool:
        return self.connected and self.bureau_score is not None


@dataclass(frozen=True)
class PlatformResult(SourceResult):
    """Internal merchant data platform"""

    avg_platform_gmv_6m: Optional[float] = None
    tenure_months: Optional[int] = None
    pre_approved_amount: Optional[float] = None

    @property
    def available(self) -> bool:
        return self.connected and self.avg_platform_gmv_6m is not None


# --- Decision outputs -------------------------------------------------------


@dataclass(frozen=True)
class CreditOffer:
    """Computed loan offer; withholding + direct debit always equals the monthly payment"""

    approved_amount: int
    interest_rate_monthly: float
    installments: int
    monthly_payment: int
    withholding_amount: int
    direct_debit_amount: int
    currency: str = "MXN"


@dataclass(frozen=True)
class DecisionPayload:
    """Consolidated underwriting output for the analyst"""

    reason: str
    total_revenue: int
    threshold_used: int
    data_sources: List[str]
    decided_at: datetime = field(default_factory=utc_now)

    syntage_monthly_revenue: float = 0
    syntage_tax_compliance: bool = True
    syntage_cfdi_count: Optional[int] = None
    syntage_tax_regime: Optional[str] = None

    places_signals_score: int = 0
    places_rating: Optional[float] = None
    places_review_count: Optional[int] = None

    facebook_fan_count: Optional[int] = None
    facebook_rating: Optional[float] = None

    instagram_followers: Optional[int] = None
    instagram_media_count: Optional[int] = None

    twilio_identity_match: Optional[bool] = None
    twilio_whatsapp_business: Optional[bool] = None
    twilio_sim_swap_detected: Optional[bool] = None
    twilio_line_type: Optional[str] = None

    bureau_score: Optional[int] = None

    platform_gmv_6m: Optional[float] = None
    platform_tenure_months: Optional[int] = None

    credit_offer: Optional[CreditOffer] = None


@dataclass(frozen=True)
class UnderwritingDecision:
    """Everything one underwriting run produces"""

    status: DecisionStatus
    payload: DecisionPayload
    syntage_result: SyntageResult
    places_result: PlacesResult
    facebook_result: FacebookResult
    instagram_result: InstagramResult
    twilio_result: TwilioResult
    bureau_result: BureauResult
    platform_result: PlatformResult


@dataclass(frozen=True)
class PrequalificationResult:
    base_amount: float
    bureau_offer: int
    social_offer: int
    fiscal_offer: int


@dataclass(frozen=True)
class Application:
    """Merchant credit application record"""

    id: str
    merchant_id: str
    created_at: datetime
    updated_at: datetime
    decision_status: DecisionStatus = DecisionStatus.UNDERWRITING_PENDING
    form_data: Optional[FormData] = None
    consent_data: Optional[ConsentData] = None
    syntage_result: Optional[SyntageResult] = None
    places_result: Optional[PlacesResult] = None
    facebook_result: Optional[FacebookResult] = None
    instagram_result: Optional[InstagramResult] = None
    twilio_result: Optional[TwilioResult] = None
    bureau_result: Optional[BureauResult] = None
    platform_result: Optional[PlatformResult] = None
    decision_payload: Optional[DecisionPayload] = None


@dataclass(frozen=True)
class RevenueSignals:
    """Figures extracted from source results that feed the weighted revenue formula"""

    monthly_revenue: float = 0
    places_score: int = 0
    bureau_score: Optional[int] = None
    tenure_months: Optional[int] = None
    tax_compliance: bool = True
    facebook_fans: Optional[int] = None
    instagram_followers: Optional[int] = None
    identity_match: Optional[bool] = None
    whatsapp_business: Optional[bool] = None
    sim_swap_detected: Optional[bool] = None


@dataclass(frozen=True)
class TrackedEvent:
    """Product analytics event emitted by the merchant-facing frontend"""

    event_name: str
    merchant_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=utc_now)
