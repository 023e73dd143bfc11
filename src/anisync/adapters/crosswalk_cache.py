"""JSON-file cache of crosswalk lookups, shared by concurrent passes.

The file maps ``"{service}_{kind}_{id}"`` to the counterpart ID found for it,
with ``target_id: null`` recording that the service had no mapping. It is read
once on construction and written by :meth:`CrosswalkCache.save` only when
something changed.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from anisync.domain.model import MediaKind, Service

log = getLogger(__name__)


class CachedMapping(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_id: int | None = None
    cached_at: datetime


_CACHE_FILE = TypeAdapter(dict[str, CachedMapping])


def cache_key(service: Service, kind: MediaKind, media_id: int) -> str:
    return f"{service}_{kind}_{media_id}"


class CrosswalkCache:
    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._dirty = False
        self._entries: dict[str, CachedMapping] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        with self._lock:
            return self._dirty

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, service: Service, kind: MediaKind, media_id: int) -> CachedMapping | None:
        """Return the cached entry, or ``None`` when the ID was never looked up."""

        with self._lock:
            return self._entries.get(cache_key(service, kind, media_id))

    def lookup(self, service: Service, kind: MediaKind, media_id: int) -> int | None:
        entry = self.get(service, kind, media_id)
        return entry.target_id if entry is not None else None

    def set(self, service: Service, kind: MediaKind, media_id: int, target_id: int | None) -> None:
        entry = CachedMapping(target_id=target_id, cached_at=datetime.now(UTC))
        with self._lock:
            self._entries[cache_key(service, kind, media_id)] = entry
            self._dirty = True

    def save(self) -> bool:
        """Write the cache if it changed since loading; return whether it wrote."""

        with self._lock:
            if not self._dirty:
                return False
            payload = _CACHE_FILE.dump_json(self._entries, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_bytes(payload)
            self._dirty = False
            count = len(self._entries)
        log.debug("Saved %d crosswalk entries to %s", count, self._path)
        return True

    def _load(self) -> dict[str, CachedMapping]:
        if not self._path.exists():
            return {}
        try:
            entries = _CACHE_FILE.validate_json(self._path.read_bytes())
        except (OSError, ValidationError) as exc:
            log.warning("Ignoring unreadable crosswalk cache %s: %s", self._path, exc)
            return {}
        log.debug("Loaded %d crosswalk entries from %s", len(entries), self._path)
        return entries
