"""Requirement types: the rules a policy enforces on the output."""

from __future__ import annotations

from dataclasses import dataclass

from trackplan.domain import MediaStream, StreamType
from trackplan.language import languages_match
from trackplan.policy.types.enums import RequirementOrder, SatisfactionLevel

# Type precedence used by specificity ordering
_TYPE_RANK: dict[StreamType, int] = {
    StreamType.VIDEO: 0,
    StreamType.AUDIO: 1,
    StreamType.SUBTITLE: 2,
}

_LEVEL_RANK: dict[SatisfactionLevel, int] = {
    level: rank for rank, level in enumerate(SatisfactionLevel)
}


def default_level(language: str | None) -> SatisfactionLevel:
    """Level used when a requirement does not name one.

    A language-less rule is an "anything else of this type" bucket;
    a language-specific rule demands every matching stream.
    """
    return SatisfactionLevel.ALL if language else SatisfactionLevel.WITH_OTHER


@dataclass(frozen=True)
class Requirement:
    """One policy rule. Immutable."""

    stream_type: StreamType
    language: str | None = None
    level: SatisfactionLevel | None = None
    allow_empty: bool = False
    """Let an ALL requirement succeed with zero matching streams."""

    def __post_init__(self) -> None:
        if not self.stream_type.is_selectable:
            raise ValueError(
                f"Requirements cannot target {self.stream_type.value} streams"
            )
        if self.level is None:
            object.__setattr__(self, "level", default_level(self.language))

    @property
    def effective_level(self) -> SatisfactionLevel:
        return self.level or default_level(self.language)

    def matches(self, stream: MediaStream) -> bool:
        """True if the stream passes this requirement's type/language filter."""
        if stream.stream_type != self.stream_type:
            return False
        if self.language is None:
            return True
        return languages_match(stream.language, self.language)

    @property
    def description(self) -> str:
        """Compact form like 'audio(rus)/all' or 'audio(*)/with_other'."""
        lang = self.language or "*"
        return f"{self.stream_type.value}({lang})/{self.effective_level.value}"

    def to_dict(self) -> dict:
        return {
            "stream_type": self.stream_type.value,
            "language": self.language,
            "level": self.effective_level.value,
            "allow_empty": self.allow_empty,
        }


RequirementSet = tuple[Requirement, ...]


def order_requirements(
    requirements: RequirementSet,
    order: RequirementOrder = RequirementOrder.DECLARED,
) -> RequirementSet:
    """Return requirements in the order they claim streams.

    DECLARED keeps policy order. SPECIFICITY stable-sorts by stream type,
    then language-specific before language-less, then level, so a
    "rus" rule always claims before an "any language" bucket.
    """
    if order == RequirementOrder.DECLARED:
        return tuple(requirements)
    return tuple(
        sorted(
            requirements,
            key=lambda r: (
                _TYPE_RANK[r.stream_type],
                r.language is None,
                _LEVEL_RANK[r.effective_level],
            ),
        )
    )
