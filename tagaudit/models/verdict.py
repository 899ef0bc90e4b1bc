"""Pydantic model for the per-site result record."""

from __future__ import annotations

from datetime import UTC, datetime

import pydantic

from tagaudit.models import consent, events, tracking
from tagaudit.utils import serialization

UNKNOWN_TRACKING_TYPE = "Unknown"


def _now() -> datetime:
    return datetime.now(UTC)


class Verdict(pydantic.BaseModel):
    """Immutable classification result for one website.

    Serialize with ``model_dump(by_alias=True)`` to get camelCase
    field names (``gtmIds``, ``trackingType`` ...).
    """

    model_config = pydantic.ConfigDict(
        frozen=True, alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    website: str
    gtm_ids: list[str] = pydantic.Field(default_factory=list)
    ga4_ids: list[str] = pydantic.Field(default_factory=list)
    summary: tracking.RequestCounts = pydantic.Field(default_factory=tracking.RequestCounts)
    consent_mode: consent.ConsentMode = pydantic.Field(default_factory=consent.ConsentMode)
    consent_tool_states: consent.ConsentToolStates = pydantic.Field(default_factory=consent.ConsentToolStates)
    tracking_type: str = UNKNOWN_TRACKING_TYPE
    gtm_loaded_initially: bool = False
    ga_cookieless_hits: bool = False
    network_requests: int = 0
    event_summary: events.EventLogSummary | None = None
    error: str | None = None
    analyzed_at: datetime = pydantic.Field(default_factory=_now)

    @property
    def succeeded(self) -> bool:
        return self.error is None
