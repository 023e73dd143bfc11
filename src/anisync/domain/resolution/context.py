"""Per-pass run context threaded through the chain and every strategy."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from anisync.domain.model import SyncDirection

from .errors import ResolutionCancelledError
from .report import SyncReport

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry, MediaKind, TargetID

    from .report import ReportSink


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncOptions:
    """Run-wide switches; one value is shared by all passes of a run."""

    direction: SyncDirection = SyncDirection.ANILIST_TO_MAL
    force_sync: bool = False
    dry_run: bool = False


@dataclass(slots=True, kw_only=True)
class RunContext:
    options: SyncOptions
    kind: MediaKind
    report: ReportSink = field(default_factory=SyncReport)
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @property
    def label(self) -> str:
        return f"{self.options.direction.label} {self.kind}"

    def source_id(self, entry: MediaEntry) -> int:
        """ID of ``entry`` on the origin catalog."""

        return entry.id_for(self.options.direction.origin)

    def target_id(self, entry: MediaEntry) -> TargetID:
        """ID of ``entry`` on the destination catalog (the source's foreign ID)."""

        return entry.id_for(self.options.direction.destination)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def raise_if_cancelled(self, checkpoint: str) -> None:
        if self.cancel_event.is_set():
            raise ResolutionCancelledError(checkpoint)
