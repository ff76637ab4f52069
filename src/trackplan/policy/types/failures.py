"""Structured planning failures.

Failures are values, not exceptions: the plan builder collects every
failure of a run and raises them together in a PlanningError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from trackplan.domain import MediaStream
from trackplan.policy.types.requirements import Requirement


@dataclass(frozen=True)
class NoCompatibleCodec:
    """A kept stream's codec is not allowed and nothing can replace it."""

    kind: ClassVar[str] = "no_compatible_codec"

    stream: MediaStream

    @property
    def stream_index(self) -> int:
        return self.stream.index

    @property
    def message(self) -> str:
        return (
            f"Stream {self.stream.label}: codec '{self.stream.codec}' is not "
            f"supported and no encodable {self.stream.stream_type.value} codec "
            "is in the supported codec list"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "stream_index": self.stream.index,
            "codec": self.stream.codec,
            "message": self.message,
        }


@dataclass(frozen=True)
class RequirementUnsatisfied:
    """A requirement that matched too few streams."""

    kind: ClassVar[str] = "requirement_unsatisfied"

    requirement: Requirement
    matched: int = 0

    @property
    def message(self) -> str:
        return (
            f"Requirement {self.requirement.description} is not satisfied: "
            f"{self.matched} matching stream(s)"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "requirement": self.requirement.to_dict(),
            "matched": self.matched,
            "message": self.message,
        }


PlanFailure = NoCompatibleCodec | RequirementUnsatisfied
