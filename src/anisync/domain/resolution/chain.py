"""Ordered strategy chain with first-match-wins semantics."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import MatchResult
from .errors import NoTargetFoundError, ResolutionCancelledError, StrategyFailureError

if TYPE_CHECKING:
    from anisync.domain.model import MediaEntry

    from .context import RunContext
    from .strategies import KnownTargets, MatchStrategy

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StrategyChain:
    """Strategies in priority order; a strategy's index is its priority."""

    strategies: tuple[MatchStrategy, ...]

    @classmethod
    def compose(cls, *strategies: MatchStrategy) -> StrategyChain:
        """Build a chain from the enabled strategies, keeping their order."""

        enabled: list[MatchStrategy] = []
        for strategy in strategies:
            if strategy.enabled:
                enabled.append(strategy)
            else:
                log.debug("Strategy %s disabled", strategy.name)
        return cls(tuple(enabled))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(strategy.name for strategy in self.strategies)

    def find_target(
        self,
        source: MediaEntry,
        known_targets: KnownTargets,
        context: RunContext,
    ) -> MatchResult:
        """Return the first strategy's match for ``source``.

        Raises:
            StrategyFailureError: a strategy raised; later strategies are not tried.
            NoTargetFoundError: every strategy declined.
            ResolutionCancelledError: the run was cancelled (never wrapped).
        """

        for index, strategy in enumerate(self.strategies):
            try:
                target = strategy.attempt(source, known_targets, context)
            except ResolutionCancelledError:
                raise
            except Exception as exc:
                raise StrategyFailureError(strategy.name, exc) from exc
            if target is not None:
                log.debug("[%s] %r resolved by %s", context.label, source.title, strategy.name)
                return MatchResult(
                    target=target,
                    target_id=context.target_id(target),
                    strategy_name=strategy.name,
                    strategy_index=index,
                )
        raise NoTargetFoundError(source.title)
