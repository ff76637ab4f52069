"""Requirement matching with first-claim semantics.

Requirements are visited in order; each claims every still-unclaimed
stream that passes its filter. A stream claimed by an earlier requirement
is invisible to later ones, so a language-specific rule and a language-less
fallback never both count the same stream.
"""

from __future__ import annotations

from dataclasses import dataclass

from trackplan.domain import MediaStream
from trackplan.policy.types import Requirement


@dataclass(frozen=True)
class RequirementMatch:
    """Streams claimed by one requirement, in container order."""

    requirement: Requirement
    streams: tuple[MediaStream, ...]

    @property
    def indices(self) -> tuple[int, ...]:
        return tuple(s.index for s in self.streams)


def match_requirements(
    requirements: tuple[Requirement, ...] | list[Requirement],
    streams: tuple[MediaStream, ...] | list[MediaStream],
) -> tuple[RequirementMatch, ...]:
    """Assign streams to requirements, first claim wins.

    Args:
        requirements: Requirements in claim order.
        streams: Stream catalog.

    Returns:
        One RequirementMatch per requirement, in the same order.
    """
    ordered_streams = sorted(streams, key=lambda s: s.index)
    claimed: set[int] = set()
    matches: list[RequirementMatch] = []

    for requirement in requirements:
        won: list[MediaStream] = []
        for stream in ordered_streams:
            if stream.index in claimed:
                continue
            if requirement.matches(stream):
                claimed.add(stream.index)
                won.append(stream)
        matches.append(RequirementMatch(requirement=requirement, streams=tuple(won)))

    return tuple(matches)
