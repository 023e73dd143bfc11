"""Resolution error taxonomy."""

from __future__ import annotations


class ResolutionError(RuntimeError):
    """Base class for failures that end the resolution of a single source."""


class StrategyFailureError(ResolutionError):
    """A strategy's underlying lookup failed; the cause is chained."""

    def __init__(self, strategy_name: str, cause: BaseException) -> None:
        super().__init__(f"strategy {strategy_name} failed: {cause}")
        self.strategy_name = strategy_name


class NoTargetFoundError(ResolutionError):
    """Every strategy in the chain declined the source."""

    def __init__(self, title: str) -> None:
        super().__init__(f"no target found for source: {title}")
        self.title = title


class ResolutionCancelledError(RuntimeError):
    """Raised at a cancellation checkpoint after the run was cancelled.

    Not a :class:`ResolutionError`: it ends the whole pass, not one source.
    """

    def __init__(self, checkpoint: str) -> None:
        super().__init__(f"resolution cancelled before {checkpoint}")
        self.checkpoint = checkpoint
