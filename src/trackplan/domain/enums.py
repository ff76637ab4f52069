"""Domain enums for trackplan.

These enums describe discovered streams and are shared by the probe
adapter, the policy engine and the executors.
"""

from enum import Enum


class StreamType(Enum):
    """Media type of a stream inside a container."""

    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"
    ATTACHMENT = "attachment"  # Fonts, cover art blobs
    DATA = "data"  # Timecode, chapters-as-stream, etc.
    OTHER = "other"

    @property
    def is_selectable(self) -> bool:
        """True if requirements may target this stream type."""
        return self in SELECTABLE_STREAM_TYPES

    @classmethod
    def parse(cls, value: str) -> "StreamType":
        """Parse a stream type name case-insensitively.

        Raises:
            ValueError: If the value names no stream type.
        """
        normalized = value.strip().casefold()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Unknown stream type '{value}'. "
            f"Must be one of: {', '.join(m.value for m in cls)}"
        )


# Stream types a requirement can address
SELECTABLE_STREAM_TYPES: frozenset[StreamType] = frozenset(
    {StreamType.VIDEO, StreamType.AUDIO, StreamType.SUBTITLE}
)
