"""Core enums for policy types.

These have no dependencies on other policy types.
"""

from enum import Enum


class SatisfactionLevel(Enum):
    """How many streams matching a requirement must reach the output."""

    ALL = "all"  # Every matching stream is kept; none may be dropped
    AT_LEAST_ONE = "at_least_one"  # Lowest-index match kept, others optional
    WITH_OTHER = "with_other"  # Optional bucket, never fails
    IGNORE = "ignore"  # Claimed and copied unchanged, no codec check
    DECLINE = "decline"  # Claimed and dropped

    @classmethod
    def parse(cls, value: str) -> "SatisfactionLevel":
        """Parse a level name in any common spelling.

        Accepts "all", "AtLeastOne", "at_least_one", "at-least-one",
        "WithOther" and so on.

        Raises:
            ValueError: If the value names no level.
        """
        key = value.strip().replace("_", "").replace("-", "").casefold()
        for member in cls:
            if member.value.replace("_", "") == key:
                return member
        raise ValueError(
            f"Unknown satisfaction level '{value}'. "
            f"Must be one of: {', '.join(m.value for m in cls)}"
        )

    @property
    def can_fail(self) -> bool:
        """True if zero matches can make this level unsatisfied."""
        return self in (SatisfactionLevel.ALL, SatisfactionLevel.AT_LEAST_ONE)


class Disposition(Enum):
    """Tentative verdict the level evaluator assigns to a claimed stream."""

    MUST_KEEP = "must_keep"
    OPTIONAL_KEEP = "optional_keep"
    PASSTHROUGH = "passthrough"  # Kept unchanged regardless of capabilities
    DROPPABLE = "droppable"  # Claimed by a declining requirement
    UNCLAIMED = "unclaimed"  # Matched by no requirement

    @property
    def is_kept(self) -> bool:
        return self in (
            Disposition.MUST_KEEP,
            Disposition.OPTIONAL_KEEP,
            Disposition.PASSTHROUGH,
        )


class ActionKind(Enum):
    """Per-stream action handed to the plan executor."""

    KEEP_AS_IS = "keep"  # Stream copy
    TRANSCODE = "transcode"  # Re-encode to target_codec
    DROP = "drop"  # Not mapped into the output


class RequirementOrder(Enum):
    """How requirements are ordered before first-claim matching."""

    DECLARED = "declared"  # Policy file order
    SPECIFICITY = "specificity"  # Language-specific rules first, per type
