"""Satisfaction level evaluation.

Turns one requirement's claimed streams into per-stream dispositions and
decides whether the requirement is satisfied.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from trackplan.policy.evaluator.matching import RequirementMatch
from trackplan.policy.types import (
    Disposition,
    Requirement,
    RequirementUnsatisfied,
    SatisfactionLevel,
)


@dataclass(frozen=True)
class LevelOutcome:
    """Result of evaluating one requirement."""

    requirement: Requirement
    dispositions: dict[int, Disposition] = field(default_factory=dict)
    failure: RequirementUnsatisfied | None = None

    @property
    def satisfied(self) -> bool:
        return self.failure is None


def evaluate_level(match: RequirementMatch) -> LevelOutcome:
    """Evaluate a requirement against the streams it claimed.

    - ALL: every claimed stream is must-keep; zero claims fail unless the
      requirement allows an empty match.
    - AT_LEAST_ONE: zero claims fail; the lowest index is must-keep, the
      rest optional-keep.
    - WITH_OTHER: never fails; claims are optional-keep.
    - IGNORE: never fails; claims pass through unchanged.
    - DECLINE: never fails; claims are droppable.

    A type absent from the catalog and a type present with no language
    match are treated the same: both are zero claims.
    """
    requirement = match.requirement
    level = requirement.effective_level
    streams = match.streams

    if level.can_fail and not streams:
        if level == SatisfactionLevel.ALL and requirement.allow_empty:
            return LevelOutcome(requirement=requirement)
        return LevelOutcome(
            requirement=requirement,
            failure=RequirementUnsatisfied(requirement=requirement, matched=0),
        )

    dispositions: dict[int, Disposition] = {}
    if level == SatisfactionLevel.ALL:
        dispositions = {s.index: Disposition.MUST_KEEP for s in streams}
    elif level == SatisfactionLevel.AT_LEAST_ONE:
        primary = min(s.index for s in streams)
        dispositions = {s.index: Disposition.OPTIONAL_KEEP for s in streams}
        dispositions[primary] = Disposition.MUST_KEEP
    elif level == SatisfactionLevel.WITH_OTHER:
        dispositions = {s.index: Disposition.OPTIONAL_KEEP for s in streams}
    elif level == SatisfactionLevel.IGNORE:
        dispositions = {s.index: Disposition.PASSTHROUGH for s in streams}
    elif level == SatisfactionLevel.DECLINE:
        dispositions = {s.index: Disposition.DROPPABLE for s in streams}

    return LevelOutcome(requirement=requirement, dispositions=dispositions)
