"""
Reporting channel for best-effort side effects.

Cache reads/writes/invalidations and image removal must never fail a content
operation. Each attempt is described by a `SideEffectResult` and handed to a
`SideEffectSink`, so failures are visible in logs and assertable in tests.
"""

from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

from blogku.monitoring.logging import get_logger

logger = get_logger(__name__)

SideEffectOperation = Literal[
    "cache_get",
    "cache_set",
    "cache_delete",
    "cache_sweep",
    "image_delete",
]


@dataclass(frozen=True)
class SideEffectResult:
    """Outcome of a single best-effort side effect."""

    operation: SideEffectOperation
    target: str
    ok: bool = True
    error: str | None = None

    @classmethod
    def success(cls, operation: SideEffectOperation, target: str) -> "SideEffectResult":
        return cls(operation=operation, target=target)

    @classmethod
    def failure(
        cls,
        operation: SideEffectOperation,
        target: str,
        error: BaseException | str,
    ) -> "SideEffectResult":
        return cls(operation=operation, target=target, ok=False, error=str(error))


@runtime_checkable
class SideEffectSink(Protocol):
    """Receiver for side-effect outcomes."""

    def record(self, result: SideEffectResult) -> None: ...


class LoggingSideEffectSink:
    """Default sink: failures as warnings, successes at debug level."""

    def record(self, result: SideEffectResult) -> None:
        if result.ok:
            logger.debug("Side effect applied", operation=result.operation, target=result.target)
            return
        logger.warning(
            "Side effect failed",
            operation=result.operation,
            target=result.target,
            error=result.error,
        )


@dataclass
class RecordingSideEffectSink:
    """Sink that keeps every result in memory, for tests and diagnostics."""

    results: list[SideEffectResult] = field(default_factory=list)

    def record(self, result: SideEffectResult) -> None:
        self.results.append(result)

    @property
    def failures(self) -> list[SideEffectResult]:
        return [r for r in self.results if not r.ok]

    def for_operation(self, operation: SideEffectOperation) -> list[SideEffectResult]:
        return [r for r in self.results if r.operation == operation]

    def clear(self) -> None:
        self.results.clear()
