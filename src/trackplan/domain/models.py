"""Domain models for trackplan.

Plain value types produced by probing and consumed by the policy engine.
They carry no behaviour that depends on ffmpeg, so the engine can be
exercised with synthetic catalogs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from trackplan.domain.enums import StreamType


@dataclass(frozen=True)
class MediaStream:
    """One discovered input stream."""

    index: int
    """Position in the input container, unique per file."""

    stream_type: StreamType

    codec: str
    """Codec name as reported by the prober (e.g. 'hevc', 'aac')."""

    language: str | None = None
    """ISO 639-2/B code, or None when the stream carries no language tag."""

    title: str | None = None

    @property
    def label(self) -> str:
        """Short description used in log lines and failure messages."""
        lang = f"({self.language})" if self.language else ""
        return f"#{self.index} {self.stream_type.value}{lang}/{self.codec}"


@dataclass(frozen=True)
class ProbeResult:
    """Stream catalog of a single media file."""

    file_path: Path
    container_format: str | None
    streams: tuple[MediaStream, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        indices = [s.index for s in self.streams]
        if len(indices) != len(set(indices)):
            raise ValueError(
                f"Duplicate stream indices in catalog for {self.file_path}"
            )
        if indices != sorted(indices):
            # Catalog order is container order
            object.__setattr__(
                self,
                "streams",
                tuple(sorted(self.streams, key=lambda s: s.index)),
            )

    @property
    def extension(self) -> str | None:
        """Lowercased file extension without the dot, if any."""
        suffix = self.file_path.suffix.lstrip(".").lower()
        return suffix or None

    def streams_of(self, stream_type: StreamType) -> tuple[MediaStream, ...]:
        """Return the streams of one type, in container order."""
        return tuple(s for s in self.streams if s.stream_type == stream_type)
