"""Select live or stub adapters for each data source from configuration"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from revenue_gateway.config import Settings, settings as default_settings
from revenue_gateway.domain.models import DataSource
from revenue_gateway.infrastructure.clients.base import SourceAdapter
from revenue_gateway.infrastructure.clients.bureau import BureauClient, StubBureauClient
from revenue_gateway.infrastructure.clients.meta import (
    FacebookClient,
    InstagramClient,
    StubFacebookClient,
    StubInstagramClient,
)
from revenue_gateway.infrastructure.clients.places import GooglePlacesClient, StubGooglePlacesClient
from revenue_gateway.infrastructure.clients.platform import PlatformClient, StubPlatformClient
from revenue_gateway.infrastructure.clients.syntage import StubSyntageClient, SyntageClient
from revenue_gateway.infrastructure.clients.twilio import StubTwilioLookupClient, TwilioLookupClient


@dataclass(frozen=True)
class SourceAdapters:
    """The seven adapters of one underwriting run plus their timeouts (seconds)"""

    syntage: SourceAdapter
    google_places: SourceAdapter
    facebook: SourceAdapter
    instagram: SourceAdapter
    twilio: SourceAdapter
    bureau: SourceAdapter
    platform: SourceAdapter
    timeouts: Dict[DataSource, float] = field(default_factory=dict)

    def in_order(self) -> List[Tuple[DataSource, SourceAdapter]]:
        """Adapters in fetch order"""
        return [(source, getattr(self, source.value)) for source in DataSource]

    def timeout_for(self, source: DataSource) -> float:
        return self.timeouts.get(source, 8.0)


def source_timeouts(config: Settings) -> Dict[DataSource, float]:
    return {
        DataSource.SYNTAGE: config.syntage_timeout_ms / 1000,
        DataSource.GOOGLE_PLACES: config.google_places_timeout_ms / 1000,
        DataSource.FACEBOOK: config.facebook_timeout_ms / 1000,
        DataSource.INSTAGRAM: config.instagram_timeout_ms / 1000,
        DataSource.TWILIO: config.twilio_timeout_ms / 1000,
        DataSource.BUREAU: config.bureau_timeout_ms / 1000,
        DataSource.PLATFORM: config.platform_timeout_ms / 1000,
    }


def build_source_adapters(config: Settings | None = None) -> SourceAdapters:
    """
    Build one adapter per provider.

    A provider gets its stub when demo mode is on or its credentials / base
    URL are not configured; missing credentials never fail the run.
    """
    config = config or default_settings
    timeouts = source_timeouts(config)
    http_timeout = config.http_timeout_seconds

    def live(source: DataSource, configured: bool) -> bool:
        use_live = configured and not config.demo_mode
        if not use_live:
            logging.info("source_stub_selected", extra={"source": source.value, "demo_mode": config.demo_mode})
        return use_live

    syntage = (
        SyntageClient(config.syntage_api_key, config.syntage_base_url, timeouts[DataSource.SYNTAGE])
        if live(DataSource.SYNTAGE, bool(config.syntage_api_key))
        else StubSyntageClient()
    )
    google_places = (
        GooglePlacesClient(config.google_places_api_key, http_timeout)
        if live(DataSource.GOOGLE_PLACES, bool(config.google_places_api_key))
        else StubGooglePlacesClient()
    )
    facebook_configured = bool(config.facebook_app_id)
    facebook = (
        FacebookClient(http_timeout)
        if live(DataSource.FACEBOOK, facebook_configured)
        else StubFacebookClient()
    )
    instagram = (
        InstagramClient(http_timeout)
        if live(DataSource.INSTAGRAM, facebook_configured)
        else StubInstagramClient()
    )
    twilio = (
        TwilioLookupClient(config.twilio_account_sid, config.twilio_auth_token, http_timeout)
        if live(DataSource.TWILIO, bool(config.twilio_account_sid))
        else StubTwilioLookupClient()
    )
    bureau = (
        BureauClient(config.bureau_api_base, http_timeout)
        if live(DataSource.BUREAU, bool(config.bureau_api_base))
        else StubBureauClient()
    )
    platform = (
        PlatformClient(config.platform_api_base, http_timeout)
        if live(DataSource.PLATFORM, bool(config.platform_api_base))
        else StubPlatformClient()
    )

    return SourceAdapters(
        syntage=syntage,
        google_places=google_places,
        facebook=facebook,
        instagram=instagram,
        twilio=twilio,
        bureau=bureau,
        platform=platform,
        timeouts=timeouts,
    )
