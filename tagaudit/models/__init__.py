# Models package: re-export the public records.
# Prefer importing from the specific submodule (e.g. tagaudit.models.consent).

from tagaudit.models.consent import (
    ConsentMode as ConsentMode,
    ConsentModeVersion as ConsentModeVersion,
    ConsentState as ConsentState,
    ConsentToolStates as ConsentToolStates,
    ConsentValue as ConsentValue,
)
from tagaudit.models.events import (
    AnalyticsHit as AnalyticsHit,
    ConsentCommand as ConsentCommand,
    EventLogSummary as EventLogSummary,
    EventValue as EventValue,
    InstrumentationEvent as InstrumentationEvent,
)
from tagaudit.models.evidence import (
    ObservedContent as ObservedContent,
    ObservedRequest as ObservedRequest,
    RuntimeSnapshot as RuntimeSnapshot,
    SiteObservation as SiteObservation,
)
from tagaudit.models.tracking import (
    AggregateState as AggregateState,
    IdentifierKind as IdentifierKind,
    RequestCategory as RequestCategory,
    RequestCounts as RequestCounts,
    TrackingIdentifier as TrackingIdentifier,
    UrlExtraction as UrlExtraction,
)
from tagaudit.models.verdict import Verdict as Verdict
