"""Consent management tool detection.

Two sources, reported separately on the verdict:

* a coarse tool name from scanning page HTML and script bodies for
  vendor hostnames, and
* a per-category report read from a live tool global captured in the
  runtime snapshot, which is the more authoritative of the two.
"""

from __future__ import annotations

from collections.abc import Iterable

from tagaudit.consent import constants
from tagaudit.models import consent, evidence
from tagaudit.utils import logger

log = logger.create_logger("Consent-Tool")


def detect_consent_tool(texts: Iterable[str]) -> str:
    """Name the consent tool referenced in the scanned text.

    Signatures are checked in a fixed order across all texts, so a page
    that mentions both Cookiebot and OneTrust reports Cookiebot.
    """
    corpus = list(texts)
    for signature, tool in constants.CONSENT_TOOL_SIGNATURES:
        if any(signature in text for text in corpus):
            return tool
    return constants.UNKNOWN_TOOL


def _cookiebot_states(snapshot: evidence.RuntimeSnapshot) -> consent.ConsentToolStates:
    given = snapshot.cookiebot_consent or {}
    return consent.ConsentToolStates(
        tool="Cookiebot",
        states={category: bool(given.get(category, False)) for category in constants.COOKIEBOT_CATEGORIES},
        raw_data={
            "hasResponse": snapshot.cookiebot_has_response,
            "consentID": snapshot.cookiebot_consent_id or "unknown",
        },
    )


def _onetrust_states(snapshot: evidence.RuntimeSnapshot) -> consent.ConsentToolStates:
    groups = snapshot.onetrust_active_groups or ""
    return consent.ConsentToolStates(
        tool="OneTrust",
        states={name: group in groups for name, group in constants.ONETRUST_GROUPS},
        raw_data={
            "activeGroups": groups,
            "consentSdk": snapshot.onetrust_sdk_present,
        },
    )


def _local_storage_states(snapshot: evidence.RuntimeSnapshot) -> consent.ConsentToolStates | None:
    entries = {
        key: value
        for key, value in snapshot.local_storage.items()
        if any(word in key.lower() for word in constants.CONSENT_STORAGE_KEYWORDS)
    }
    if not entries:
        return None
    return consent.ConsentToolStates(tool="LocalStorage", raw_data=entries)


def read_consent_tool_states(snapshot: evidence.RuntimeSnapshot | None) -> consent.ConsentToolStates:
    """Build the per-category consent report from a runtime snapshot.

    Cookiebot takes precedence over OneTrust; when neither global is
    present, consent-looking ``localStorage`` entries are reported
    under ``LocalStorage``.

    Args:
        snapshot: Runtime snapshot, or ``None`` if none was taken.

    Returns:
        The report; ``tool`` is ``"Unknown"`` when nothing was found.
    """
    if snapshot is None:
        return consent.ConsentToolStates.unknown()

    if snapshot.cookiebot_present:
        report = _cookiebot_states(snapshot)
    elif snapshot.onetrust_active_groups is not None or snapshot.onetrust_sdk_present:
        report = _onetrust_states(snapshot)
    else:
        report = _local_storage_states(snapshot) or consent.ConsentToolStates.unknown()

    if report.tool != constants.UNKNOWN_TOOL:
        log.info("Consent tool global found", {"tool": report.tool, "categories": len(report.states)})
    return report
