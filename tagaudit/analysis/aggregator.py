"""
Per-site signal aggregation.

A ``SignalAggregator`` is owned by exactly one site analysis.  It folds
extractor output into a deduplicated identifier set, request counters
and the chronological list of request URLs; nothing is ever removed.
"""

from __future__ import annotations

import collections

from tagaudit.analysis import extractors
from tagaudit.models import events, evidence, tracking
from tagaudit.utils import logger
from tagaudit.utils import url as url_utils

log = logger.create_logger("Aggregator")

Observation = (
    evidence.ObservedRequest
    | evidence.ObservedContent
    | evidence.RuntimeSnapshot
    | events.InstrumentationEvent
)


class SignalAggregator:
    """Accumulates tracking signals for one site analysis.

    Args:
        content_id_min_length: Minimum id suffix length for ids found in
            page and script text.
        url_preview_length: Truncation length for URLs in debug logs.
    """

    def __init__(self, content_id_min_length: int = 6, url_preview_length: int = 200) -> None:
        self._min_length = content_id_min_length
        self._preview_length = url_preview_length
        # dict keys double as an insertion-ordered set
        self._identifiers: dict[tracking.TrackingIdentifier, None] = {}
        self._counts: collections.Counter[str] = collections.Counter()
        self._urls: list[str] = []
        self._tracking_urls: list[str] = []
        self._texts: list[str] = []
        self._snapshot: evidence.RuntimeSnapshot | None = None
        self._events: list[events.InstrumentationEvent] = []
        self._observations = 0

    def _add(self, ids: list[tracking.TrackingIdentifier], source: str) -> None:
        for identifier in ids:
            if identifier not in self._identifiers:
                self._identifiers[identifier] = None
                log.debug(f"Found {identifier.kind} id", {"id": identifier.value, "source": source})

    def observe_request(self, request: evidence.ObservedRequest) -> tracking.RequestCategory:
        """Record a request URL and return the category it was counted under."""
        self._observations += 1
        self._urls.append(request.url)
        result = extractors.extract_from_url(request.url)
        self._counts[result.category] += 1
        self._add(result.identifiers, "custom-endpoint" if result.custom_endpoint else result.category)
        if result.category != "other":
            self._tracking_urls.append(request.url)
            log.debug(
                f"Captured {result.category} request",
                {"url": url_utils.preview(request.url, self._preview_length)},
            )
        return result.category

    def observe_content(self, content: evidence.ObservedContent) -> None:
        """Record a page or script body."""
        self._observations += 1
        self._texts.append(content.text)
        self._add(extractors.extract_from_content(content.text, self._min_length), content.source_kind)

    def observe_snapshot(self, snapshot: evidence.RuntimeSnapshot) -> None:
        """Record a runtime snapshot; a later snapshot replaces an earlier one."""
        self._observations += 1
        self._snapshot = snapshot
        self._add(extractors.extract_from_snapshot(snapshot), "runtime")

    def observe_event(self, event: events.InstrumentationEvent) -> None:
        """Record an instrumentation event for the event log digest."""
        self._observations += 1
        self._events.append(event)

    def observe(self, item: Observation) -> None:
        """Dispatch any evidence item to the matching ``observe_*`` method."""
        match item:
            case evidence.ObservedRequest():
                self.observe_request(item)
            case evidence.ObservedContent():
                self.observe_content(item)
            case evidence.RuntimeSnapshot():
                self.observe_snapshot(item)
            case events.InstrumentationEvent():
                self.observe_event(item)
            case _:
                raise TypeError(f"Unsupported observation type: {type(item).__name__}")

    def finalize(self) -> tracking.AggregateState:
        """Return an immutable snapshot of everything observed so far."""
        return tracking.AggregateState(
            identifiers=list(self._identifiers),
            counts=tracking.RequestCounts(
                gtm=self._counts["gtm"],
                ga=self._counts["ga"],
                other=self._counts["other"],
            ),
            request_urls=list(self._urls),
            tracking_urls=list(self._tracking_urls),
            scanned_texts=list(self._texts),
            snapshot=self._snapshot,
            events=list(self._events),
            observation_count=self._observations,
        )
