"""Shared constants for Consent Mode decoding and consent tool detection."""

from __future__ import annotations

from tagaudit.models import consent

# Category order of the positional chunks in a ``gcd`` descriptor.
CONSENT_CATEGORIES: tuple[str, ...] = (
    "ad_storage",
    "analytics_storage",
    "functionality_storage",
    "personalization_storage",
    "security_storage",
)

# Leading characters of a ``gcd`` value that carry the version marker.
GCD_VERSION_PREFIX_LENGTH = 2
GCD_CHUNK_LENGTH = 2

GCD_CHUNK_STATES: dict[str, consent.ConsentValue] = {
    "p3": "granted",
    "p2": "denied",
    "l1": "not_set",
}

# ``gcs`` values that only Consent Mode v2 emits.
GCS_V2_VALUES: tuple[str, ...] = ("G100", "G110")

# Checked in order against page HTML and fetched script bodies; first hit wins.
CONSENT_TOOL_SIGNATURES: tuple[tuple[str, str], ...] = (
    ("cookiebot.com", "Cookiebot"),
    ("onetrust.com", "OneTrust"),
    ("trustarc.com", "TrustArc"),
    ("quantcast.mgr", "Quantcast"),
)

UNKNOWN_TOOL = "Unknown"

# OneTrust group ids stored in ``OnetrustActiveGroups``.
ONETRUST_GROUPS: tuple[tuple[str, str], ...] = (
    ("strictly_necessary", "C0001"),
    ("performance", "C0002"),
    ("functional", "C0003"),
    ("targeting", "C0004"),
)

COOKIEBOT_CATEGORIES: tuple[str, ...] = ("necessary", "preferences", "statistics", "marketing")

# localStorage keys that suggest a home-grown consent store.
CONSENT_STORAGE_KEYWORDS: tuple[str, ...] = ("consent", "cookie", "gdpr")
