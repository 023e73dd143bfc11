"""Entity resolution between the two catalogs.

Flow for one pass (one media kind, one direction):
1) filter sources without a status or on the ignore list
2) run the strategy chain over each source in input order
3) deduplicate mappings that claim the same target
4) apply the kept mappings and report conflicts and misses
"""

from __future__ import annotations

from .apply import SyncStatistics, UpdateKind, UpdateOutcome, apply_resolution
from .chain import StrategyChain
from .context import RunContext, SyncOptions
from .contracts import (
    DEFAULT_IGNORED_TITLES,
    FORCE_SYNC_STRATEGY,
    Conflict,
    IgnoredSource,
    IgnoreRules,
    MatchResult,
    PassState,
    ResolutionResult,
    ResolvedMapping,
    UnresolvedReason,
    UnresolvedSource,
)
from .deduplicate import DeduplicationResult, deduplicate_mappings
from .engine import ResolutionEngine, index_targets
from .errors import (
    NoTargetFoundError,
    ResolutionCancelledError,
    ResolutionError,
    StrategyFailureError,
)
from .report import ReportSink, SyncReport, SyncWarning, WarningKind
from .resolve import PassOutcome, ResolutionPass

__all__ = [
    "DEFAULT_IGNORED_TITLES",
    "FORCE_SYNC_STRATEGY",
    "Conflict",
    "DeduplicationResult",
    "IgnoreRules",
    "IgnoredSource",
    "MatchResult",
    "NoTargetFoundError",
    "PassOutcome",
    "PassState",
    "ReportSink",
    "ResolutionCancelledError",
    "ResolutionEngine",
    "ResolutionError",
    "ResolutionPass",
    "ResolutionResult",
    "ResolvedMapping",
    "RunContext",
    "StrategyChain",
    "StrategyFailureError",
    "SyncOptions",
    "SyncReport",
    "SyncStatistics",
    "SyncWarning",
    "UnresolvedReason",
    "UnresolvedSource",
    "UpdateKind",
    "UpdateOutcome",
    "WarningKind",
    "apply_resolution",
    "deduplicate_mappings",
    "index_targets",
]
