"""Collapse mappings that claim the same destination entry.

Within a group sharing a target ID the winner is, in order:

1. the mapping found by the highest-priority (lowest index) strategy;
2. the mapping whose source title equals the target title, ignoring case;
3. the mapping with the lowest source ID, then title.

Every other mapping in the group becomes a :class:`Conflict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .contracts import Conflict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from anisync.domain.model import TargetID

    from .contracts import ResolvedMapping

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class DeduplicationResult:
    kept: list[ResolvedMapping] = field(default_factory=list["ResolvedMapping"])
    conflicts: list[Conflict] = field(default_factory=list["Conflict"])


class DeduplicateMappings(Protocol):
    def __call__(self, mappings: Sequence[ResolvedMapping], /) -> DeduplicationResult: ...


def _exact_title(mapping: ResolvedMapping) -> bool:
    source_title = mapping.source.title
    return bool(source_title) and source_title.casefold() == mapping.target.title.casefold()


def _priority_key(mapping: ResolvedMapping) -> tuple[int, int, int, str]:
    return (
        mapping.strategy_index,
        0 if _exact_title(mapping) else 1,
        mapping.source_id,
        mapping.source.title,
    )


def resolve_conflict_group(
    group: Sequence[ResolvedMapping],
) -> tuple[ResolvedMapping, list[Conflict]]:
    ordered = sorted(group, key=_priority_key)
    winner, losers = ordered[0], ordered[1:]
    conflicts = [
        Conflict(
            loser=loser.source,
            winner=winner.source,
            target=winner.target,
            target_id=winner.target_id,
            loser_strategy=loser.strategy_name,
            winner_strategy=winner.strategy_name,
        )
        for loser in losers
    ]
    return winner, conflicts


def deduplicate_mappings(mappings: Sequence[ResolvedMapping]) -> DeduplicationResult:
    """Keep one mapping per target ID; groups are emitted in first-seen order."""

    groups: dict[TargetID, list[ResolvedMapping]] = {}
    for mapping in mappings:
        groups.setdefault(mapping.target_id, []).append(mapping)

    result = DeduplicationResult()
    for target_id, group in groups.items():
        if len(group) == 1:
            result.kept.append(group[0])
            continue
        winner, conflicts = resolve_conflict_group(group)
        log.debug(
            "Target %d claimed by %d sources; keeping %r via %s",
            target_id,
            len(group),
            winner.source.title,
            winner.strategy_name,
        )
        result.kept.append(winner)
        result.conflicts.extend(conflicts)
    return result
