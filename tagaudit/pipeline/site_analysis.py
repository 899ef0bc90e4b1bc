"""
Per-site analysis entry point.

Feeds one site's collected evidence through a fresh aggregator in
observation order and assembles the verdict.  Browser driving, page
settling and result export happen in the caller; this module only sees
the evidence they produced.
"""

from __future__ import annotations

from tagaudit import config
from tagaudit.analysis import aggregator, verdict
from tagaudit.models import evidence
from tagaudit.models import verdict as verdict_model
from tagaudit.utils import logger

log = logger.create_logger("Site-Analysis")

# Re-exported for collaborators that hit a load error before any evidence exists.
failed_verdict = verdict.failed_verdict


def _fold(
    observation: evidence.SiteObservation,
    settings: config.EngineSettings,
) -> aggregator.SignalAggregator:
    agg = aggregator.SignalAggregator(
        content_id_min_length=settings.content_id_min_length,
        url_preview_length=settings.log_url_preview_length,
    )
    for request in observation.requests:
        agg.observe_request(request)
    for content in observation.contents:
        agg.observe_content(content)
    if observation.snapshot is not None:
        agg.observe_snapshot(observation.snapshot)
    for event in observation.events:
        agg.observe_event(event)
    return agg


def analyze_site(
    observation: evidence.SiteObservation,
    settings: config.EngineSettings | None = None,
) -> verdict_model.Verdict:
    """Classify one site from everything observed during its visit.

    Requests are folded first, in the order given, followed by content
    blobs, the runtime snapshot and the event log.  Never raises for
    missing or empty evidence.

    Args:
        observation: Evidence collected for the site.
        settings: Engine settings; defaults to the cached environment
            settings.

    Returns:
        The site's verdict.
    """
    settings = settings or config.get_settings()
    logger.start_log_file(observation.website, settings.write_to_file)
    try:
        log.section(f"Analysing {observation.website}")
        log.start_timer("classification")

        state = _fold(observation, settings).finalize()
        if state.is_empty:
            log.warn("No evidence collected for site", {"website": observation.website})
        else:
            log.info("Evidence folded", {
                "requests": len(state.request_urls),
                "gtm": state.counts.gtm,
                "ga": state.counts.ga,
                "other": state.counts.other,
                "texts": len(state.scanned_texts),
                "events": len(state.events),
            })

        result = verdict.assemble_verdict(
            observation.website,
            state,
            include_event_summary=settings.include_event_summary,
        )
        log.end_timer("classification", "Verdict assembled")
        log.success("Site analysed", {
            "trackingType": result.tracking_type,
            "gtmIds": ", ".join(result.gtm_ids) or "None",
            "ga4Ids": ", ".join(result.ga4_ids) or "None",
            "consentMode": result.consent_mode.summary,
            "consentTool": result.consent_mode.tool,
        })
        return result
    finally:
        logger.end_log_file()
