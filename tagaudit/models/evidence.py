"""Pydantic models for the evidence a site visit hands to the engine."""

from __future__ import annotations

from typing import Literal

import pydantic

from tagaudit.models import events as event_models
from tagaudit.utils import serialization

ContentSourceKind = Literal["page", "inlineScript", "externalScript"]


class ObservedRequest(pydantic.BaseModel):
    """One network request seen during a site visit."""

    model_config = pydantic.ConfigDict(frozen=True)

    url: str


class ObservedContent(pydantic.BaseModel):
    """A blob of page HTML or script text."""

    model_config = pydantic.ConfigDict(
        frozen=True, alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    text: str
    source_kind: ContentSourceKind = "page"


class RuntimeSnapshot(pydantic.BaseModel):
    """A one-time read of the page's tag-manager and consent globals.

    The consent fields mirror what an in-page probe can read from
    ``window.Cookiebot``, ``window.OnetrustActiveGroups`` /
    ``window.OneTrust`` and ``localStorage``.
    """

    model_config = pydantic.ConfigDict(
        frozen=True, alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    has_tag_manager_object: bool = False
    tag_manager_object_keys: list[str] = pydantic.Field(default_factory=list)
    data_layer_serialized: str | None = None

    cookiebot_present: bool = False
    cookiebot_consent: dict[str, bool] | None = None
    cookiebot_has_response: bool = False
    cookiebot_consent_id: str | None = None
    onetrust_active_groups: str | None = None
    onetrust_sdk_present: bool = False
    local_storage: dict[str, str] = pydantic.Field(default_factory=dict)


class SiteObservation(pydantic.BaseModel):
    """Everything collected for one site, in the order it was observed.

    ``requests`` must be chronological: the consent decoder keeps the
    first ``gcd`` descriptor it sees.
    """

    model_config = pydantic.ConfigDict(alias_generator=serialization.snake_to_camel, populate_by_name=True)

    website: str
    requests: list[ObservedRequest] = pydantic.Field(default_factory=list)
    contents: list[ObservedContent] = pydantic.Field(default_factory=list)
    snapshot: RuntimeSnapshot | None = None
    events: list[event_models.InstrumentationEvent] = pydantic.Field(default_factory=list)

    @classmethod
    def from_urls(cls, website: str, urls: list[str], html: str | None = None) -> SiteObservation:
        """Build an observation from bare request URLs and optional page HTML."""
        return cls(
            website=website,
            requests=[ObservedRequest(url=u) for u in urls],
            contents=[ObservedContent(text=html)] if html else [],
        )
