"""Pydantic models for the instrumentation event log and its digest."""

from __future__ import annotations

from typing import Literal

import pydantic
from typing_extensions import TypeAliasType

from tagaudit.utils import serialization

# Payload values captured from ``gtag(...)`` calls and ``dataLayer.push``.
EventValue = TypeAliasType(
    "EventValue",
    "str | bool | int | float | None | list[EventValue] | dict[str, EventValue]",
)

EventType = Literal["dataLayer.push", "gtag", "consent", "ecommerce", "sendBeacon", "fetch"]

HitTransport = Literal["beacon", "fetch"]


class InstrumentationEvent(pydantic.BaseModel):
    """One call recorded by the in-page analytics debugger.

    For ``gtag`` events the payload carries ``command``, ``targetId``
    and ``parameters``; for ``consent`` events ``action`` and
    ``consent_types``; for ``dataLayer.push`` and ``ecommerce`` events
    the pushed object under ``event``; for ``sendBeacon`` and ``fetch``
    events the hit ``url``.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    type: EventType
    timestamp: float = 0.0
    payload: dict[str, EventValue] = pydantic.Field(default_factory=dict)


class ConsentCommand(pydantic.BaseModel):
    """A ``gtag('consent', action, {...})`` call."""

    action: str
    states: dict[str, str] = pydantic.Field(default_factory=dict)


class AnalyticsHit(pydantic.BaseModel):
    """A GA hit sent through ``navigator.sendBeacon`` or ``fetch``."""

    model_config = pydantic.ConfigDict(alias_generator=serialization.snake_to_camel, populate_by_name=True)

    transport: HitTransport
    host: str
    measurement_id: str | None = None
    event_name: str | None = None
    page_title: str | None = None
    consent_state: str | None = None


class EventLogSummary(pydantic.BaseModel):
    """Digest of the event log attached to a verdict."""

    model_config = pydantic.ConfigDict(alias_generator=serialization.snake_to_camel, populate_by_name=True)

    event_counts: dict[str, int] = pydantic.Field(default_factory=dict)
    consent_commands: list[ConsentCommand] = pydantic.Field(default_factory=list)
    ecommerce_events: list[str] = pydantic.Field(default_factory=list)
    analytics_hits: list[AnalyticsHit] = pydantic.Field(default_factory=list)
    custom_dimensions: list[str] = pydantic.Field(default_factory=list)
    custom_metrics: list[str] = pydantic.Field(default_factory=list)
    config_targets: list[str] = pydantic.Field(default_factory=list)
