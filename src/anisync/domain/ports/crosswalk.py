"""Ports for ID crosswalk tables (manual mappings, offline database, live services)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from anisync.domain.model import MediaKind, Service


class CrosswalkLookupError(RuntimeError):
    """Raised when a live crosswalk service cannot answer a lookup."""


@runtime_checkable
class CrosswalkLookup(Protocol):
    def lookup(self, service: Service, kind: MediaKind, media_id: int) -> int | None:
        """Return the counterpart ID of ``media_id`` (an ID on ``service``), if known."""
        ...
