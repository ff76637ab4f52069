"""Evaluation exception classes.

This module defines exception classes used during policy evaluation.
"""

from __future__ import annotations

from typing import Any

from trackplan.domain import MediaStream
from trackplan.policy.exceptions import PolicyError
from trackplan.policy.types import NoCompatibleCodec, PlanFailure


class EvaluationError(PolicyError):
    """Base class for evaluation errors."""

    pass


class NoCompatibleCodecError(EvaluationError):
    """A stream must be re-encoded but no supported codec fits its type."""

    def __init__(self, stream: MediaStream) -> None:
        self.stream = stream
        self.failure = NoCompatibleCodec(stream)
        super().__init__(self.failure.message)


class PlanningError(EvaluationError):
    """No valid plan exists. Carries every failure found in the run."""

    def __init__(self, failures: tuple[PlanFailure, ...] | list[PlanFailure]) -> None:
        if not failures:
            raise ValueError("PlanningError requires at least one failure")
        self.failures: tuple[PlanFailure, ...] = tuple(failures)
        count = len(self.failures)
        details = "; ".join(f.message for f in self.failures)
        super().__init__(
            f"Planning failed with {count} error{'s' if count != 1 else ''}: "
            f"{details}"
        )

    def of_kind(self, kind: str) -> tuple[PlanFailure, ...]:
        """Failures of one kind ('no_compatible_codec', ...)."""
        return tuple(f for f in self.failures if f.kind == kind)

    def to_dict(self) -> dict[str, Any]:
        return {"failures": [f.to_dict() for f in self.failures]}
