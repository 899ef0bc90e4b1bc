"""Verdict assembly.

Runs the consent decoder, classifier and event digest once over a
finished aggregate and merges their outputs into a ``Verdict``.  Also
builds the error verdict for sites the collaborator could not load.
"""

from __future__ import annotations

from datetime import datetime

from tagaudit.analysis import classifier, events
from tagaudit.consent import decoder
from tagaudit.models import consent, tracking, verdict
from tagaudit.utils import errors


def assemble_verdict(
    website: str,
    aggregate: tracking.AggregateState,
    *,
    include_event_summary: bool = True,
    analyzed_at: datetime | None = None,
) -> verdict.Verdict:
    """Build the verdict for one site from its final aggregate.

    Works for an empty aggregate too: the result then has no ids, zero
    counters, ``Unknown`` tracking type and Consent Mode not detected.

    Args:
        website: The analysed site URL.
        aggregate: Final aggregator state.
        include_event_summary: Attach the event log digest when events
            were recorded.
        analyzed_at: Timestamp override; defaults to now (UTC).

    Returns:
        The assembled verdict.
    """
    urls = aggregate.tracking_urls
    detected, version = decoder.detect_consent_mode(urls)
    result = classifier.classify(aggregate)

    fields: dict[str, object] = {}
    if analyzed_at is not None:
        fields["analyzed_at"] = analyzed_at
    if include_event_summary and aggregate.events:
        fields["event_summary"] = events.summarize_events(aggregate.events)

    return verdict.Verdict(
        website=website,
        gtm_ids=aggregate.gtm_ids,
        ga4_ids=aggregate.ga4_ids,
        summary=aggregate.counts,
        consent_mode=consent.ConsentMode(
            detected=detected,
            version=version,
            tool=result.consent_tool,
            states=decoder.decode_consent_state(urls),
        ),
        consent_tool_states=result.consent_tool_states,
        tracking_type=result.tracking_type,
        gtm_loaded_initially=classifier.gtm_loaded_initially(urls),
        ga_cookieless_hits=classifier.ga_cookieless_hits(urls),
        network_requests=aggregate.counts.tracking,
        **fields,
    )


def failed_verdict(
    website: str,
    error: BaseException | str,
    *,
    analyzed_at: datetime | None = None,
) -> verdict.Verdict:
    """Build the verdict for a site that could not be analysed.

    Every analytic field stays at its default; only ``error`` is set.
    """
    if analyzed_at is None:
        return verdict.Verdict(website=website, error=errors.get_error_message(error))
    return verdict.Verdict(website=website, error=errors.get_error_message(error), analyzed_at=analyzed_at)
