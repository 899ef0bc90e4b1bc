"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from tagaudit import config
from tagaudit.models import events, evidence

# ── Request URLs ────────────────────────────────────────────────

GTM_LOAD = "https://www.googletagmanager.com/gtm.js?id=GTM-ABC123"
GTAG_LOAD = "https://www.googletagmanager.com/gtag/js?id=G-GTAG001&l=dataLayer"
GA_COLLECT_V2 = (
    "https://region1.google-analytics.com/g/collect?v=2&tid=G-COLLECT1&gcs=G100&gcd=13p3p3p2p5l1&en=page_view"
)
CUSTOM_COLLECT = "https://analytics.example.com/g/collect?tid=G-XYZ999"
FIRST_PARTY = "https://example.com/static/app.js"


@pytest.fixture()
def settings() -> config.EngineSettings:
    """Default engine settings, independent of the process environment."""
    return config.EngineSettings(
        content_id_min_length=6,
        log_url_preview_length=200,
        include_event_summary=True,
        write_to_file=False,
    )


@pytest.fixture()
def gtm_page_html() -> str:
    """Page HTML with a GTM snippet and a Cookiebot banner script."""
    return (
        "<html><head>"
        '<script src="https://consent.cookiebot.com/uc.js" data-cbid="abc"></script>'
        "<script>(function(w,d,s,l,i){w[l]=w[l]||[];})(window,document,'script','dataLayer','GTM-PAGE01');</script>"
        "</head><body></body></html>"
    )


@pytest.fixture()
def cookiebot_snapshot() -> evidence.RuntimeSnapshot:
    """Runtime snapshot with a GTM container and a Cookiebot global."""
    return evidence.RuntimeSnapshot(
        has_tag_manager_object=True,
        tag_manager_object_keys=["GTM-RUN001", "G-RUN0001", "dataLayer"],
        data_layer_serialized='[{"gtm.start":1,"event":"gtm.js"},{"gtm.uniqueEventId":2,"container":"GTM-DL0001"}]',
        cookiebot_present=True,
        cookiebot_consent={"necessary": True, "preferences": False, "statistics": True, "marketing": False},
        cookiebot_has_response=True,
        cookiebot_consent_id="cb-123",
    )


@pytest.fixture()
def sample_events() -> list[events.InstrumentationEvent]:
    """A short instrumentation log: consent default, config, a purchase."""
    return [
        events.InstrumentationEvent(
            type="gtag",
            timestamp=1.0,
            payload={"command": "consent", "targetId": "default", "parameters": {"ad_storage": "denied"}},
        ),
        events.InstrumentationEvent(
            type="consent",
            timestamp=1.0,
            payload={"action": "default", "consent_types": {"ad_storage": "denied", "analytics_storage": "granted"}},
        ),
        events.InstrumentationEvent(
            type="gtag",
            timestamp=2.0,
            payload={"command": "config", "targetId": "G-CONFIG01", "parameters": {}},
        ),
        events.InstrumentationEvent(
            type="dataLayer.push",
            timestamp=3.0,
            payload={"event": {"event": "purchase", "ecommerce": {"value": 9.99}, "user_tier": "gold"}, "eventName": "purchase"},
        ),
        events.InstrumentationEvent(
            type="ecommerce",
            timestamp=3.0,
            payload={"event": {"event": "purchase", "ecommerce": {"value": 9.99}}, "eventName": "purchase"},
        ),
    ]
