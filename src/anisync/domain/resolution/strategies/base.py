"""Strategy contract shared by every matcher in the chain."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from anisync.domain.model import MediaEntry, TargetID
    from anisync.domain.resolution.context import RunContext

log = getLogger(__name__)

type KnownTargets = Mapping[TargetID, MediaEntry]


@runtime_checkable
class MatchStrategy(Protocol):
    """One way of finding the destination entry for a source entry.

    ``attempt`` returns the target when found and ``None`` when the strategy
    declines. Lookup failures are raised; the chain wraps them with the
    strategy's name.
    """

    @property
    def name(self) -> str: ...

    @property
    def enabled(self) -> bool: ...

    def attempt(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MediaEntry | None: ...


def known_target(
    target_id: TargetID,
    known_targets: KnownTargets,
    context: RunContext,
    *,
    via: str,
) -> MediaEntry | None:
    """Return the user's entry for ``target_id``, if it is on their list."""

    target = known_targets.get(target_id)
    if target is None:
        log.debug("[%s] %s points to ID %d, not on the user's list", context.label, via, target_id)
        return None
    log.debug("[%s] %s matched ID %d: %s", context.label, via, target_id, target.title)
    return target
