"""Pydantic models for Consent Mode state and consent tool reports."""

from __future__ import annotations

from typing import Literal

import pydantic

from tagaudit.utils import serialization

ConsentValue = Literal["granted", "denied", "not_set", "unknown"]

ConsentModeVersion = Literal["v1", "v2", "unknown"]


class ConsentState(pydantic.BaseModel):
    """Per-category consent decoded from a ``gcd`` descriptor."""

    model_config = pydantic.ConfigDict(frozen=True)

    ad_storage: ConsentValue = "unknown"
    analytics_storage: ConsentValue = "unknown"
    functionality_storage: ConsentValue = "unknown"
    personalization_storage: ConsentValue = "unknown"
    security_storage: ConsentValue = "unknown"
    descriptor: str | None = None

    def as_dict(self) -> dict[str, ConsentValue]:
        """Return the category states without the raw descriptor."""
        return self.model_dump(exclude={"descriptor"})

    @property
    def found(self) -> bool:
        """Whether a descriptor was decoded at all."""
        return self.descriptor is not None


class ConsentMode(pydantic.BaseModel):
    """Consent Mode verdict for a site."""

    model_config = pydantic.ConfigDict(frozen=True)

    detected: bool = False
    version: ConsentModeVersion = "unknown"
    tool: str = "Unknown"
    states: ConsentState = pydantic.Field(default_factory=ConsentState)

    @property
    def summary(self) -> str:
        """Spreadsheet form, e.g. ``"Yes v2"``."""
        return f"{'Yes' if self.detected else 'No'} {self.version}"


class ConsentToolStates(pydantic.BaseModel):
    """Per-category report read from a live consent tool global."""

    model_config = pydantic.ConfigDict(
        frozen=True, alias_generator=serialization.snake_to_camel, populate_by_name=True
    )

    tool: str = "Unknown"
    states: dict[str, bool] = pydantic.Field(default_factory=dict)
    raw_data: dict[str, str | bool] | None = None

    @classmethod
    def unknown(cls) -> ConsentToolStates:
        """Return the empty report used when no tool global is present."""
        return cls()
