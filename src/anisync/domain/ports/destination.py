"""Ports onto the destination catalog's API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from anisync.domain.model import MediaEntry, TargetID


@runtime_checkable
class DestinationService(Protocol):
    """Read-only lookups against the destination catalog.

    Implementations return ``None`` when the catalog has no such entry and raise
    for transport or payload failures.
    """

    def get_by_id(self, target_id: TargetID) -> MediaEntry | None: ...

    def search_by_title(self, title: str) -> Sequence[MediaEntry]: ...

    def get_by_foreign_id(self, foreign_id: int) -> MediaEntry | None:
        """Find the destination entry recorded against an ID of the other catalog."""
        ...


class DestinationUpdater(Protocol):
    def update(self, target_id: TargetID, source: MediaEntry) -> None: ...
