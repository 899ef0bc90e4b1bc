"""Spreadsheet row shaping for verdicts.

The result sink appends one row per site under a fixed header.  This
module only produces the cell values; talking to the spreadsheet API is
the sink's job.
"""

from __future__ import annotations

from tagaudit.models import verdict

SHEET_HEADERS: tuple[str, ...] = (
    "Website",
    "Status",
    "GTM Containers",
    "GTM IDs",
    "GA4 IDs",
    "Consent Mode",
    "Consent Tool",
    "Tracking Type",
    "GTM Immediate Load",
    "Cookieless Hits",
    "Network Requests",
    "Error Message",
    "Analysis Date",
)

SheetCell = str | int


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def to_sheet_row(result: verdict.Verdict) -> list[SheetCell]:
    """Render *result* as cell values aligned with ``SHEET_HEADERS``.

    Successful rows write empty id lists as blank cells.  Error rows
    carry no analysis, so their id columns read ``None`` and their
    consent columns ``Unknown``.
    """
    if result.succeeded:
        gtm_ids = ", ".join(result.gtm_ids)
        ga4_ids = ", ".join(result.ga4_ids)
        consent_mode = result.consent_mode.summary
        consent_tool = result.consent_mode.tool
    else:
        gtm_ids = ga4_ids = "None"
        consent_mode = consent_tool = "Unknown"
    return [
        result.website,
        "Success" if result.succeeded else "Error",
        len(result.gtm_ids),
        gtm_ids,
        ga4_ids,
        consent_mode,
        consent_tool,
        result.tracking_type,
        _yes_no(result.gtm_loaded_initially),
        _yes_no(result.ga_cookieless_hits),
        result.network_requests,
        result.error or "",
        result.analyzed_at.isoformat(),
    ]
