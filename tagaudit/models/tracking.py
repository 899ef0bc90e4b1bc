"""Pydantic models for tracking identifiers and the per-site aggregate."""

from __future__ import annotations

from typing import Literal

import pydantic

from tagaudit.models import events as event_models
from tagaudit.models import evidence

IdentifierKind = Literal["GTM", "GA4"]

RequestCategory = Literal["gtm", "ga", "other"]


class TrackingIdentifier(pydantic.BaseModel):
    """A GTM container id or GA4 measurement id.

    Frozen so instances hash by ``(kind, value)`` and can live in sets.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    kind: IdentifierKind
    value: str

    @classmethod
    def gtm(cls, value: str) -> TrackingIdentifier:
        return cls(kind="GTM", value=value)

    @classmethod
    def ga4(cls, value: str) -> TrackingIdentifier:
        return cls(kind="GA4", value=value)


class UrlExtraction(pydantic.BaseModel):
    """Category and identifiers recovered from one request URL."""

    category: RequestCategory
    identifiers: list[TrackingIdentifier] = pydantic.Field(default_factory=list)
    custom_endpoint: bool = False


class RequestCounts(pydantic.BaseModel):
    """Request counters by category."""

    gtm: int = 0
    ga: int = 0
    other: int = 0

    @property
    def tracking(self) -> int:
        """Requests that went to GTM or a GA collection endpoint."""
        return self.gtm + self.ga


class AggregateState(pydantic.BaseModel):
    """Final folded state of one site analysis.

    ``request_urls`` holds every observed request; ``tracking_urls`` only
    those counted as ``gtm`` or ``ga``.  The consent decoder and the
    classifier read ``tracking_urls``, so ads pings and proxied URLs
    never contribute consent state or tracking evidence.
    """

    identifiers: list[TrackingIdentifier] = pydantic.Field(default_factory=list)
    counts: RequestCounts = pydantic.Field(default_factory=RequestCounts)
    request_urls: list[str] = pydantic.Field(default_factory=list)
    tracking_urls: list[str] = pydantic.Field(default_factory=list)
    scanned_texts: list[str] = pydantic.Field(default_factory=list)
    snapshot: evidence.RuntimeSnapshot | None = None
    events: list[event_models.InstrumentationEvent] = pydantic.Field(default_factory=list)
    observation_count: int = 0

    @property
    def gtm_ids(self) -> list[str]:
        return [i.value for i in self.identifiers if i.kind == "GTM"]

    @property
    def ga4_ids(self) -> list[str]:
        return [i.value for i in self.identifiers if i.kind == "GA4"]

    @property
    def is_empty(self) -> bool:
        """``True`` when nothing at all was observed (site never loaded)."""
        return self.observation_count == 0
