"""Plan types produced by policy evaluation.

A Plan is immutable once produced and is the only artifact handed to a
plan executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from trackplan.core.codecs import encoder_for
from trackplan.domain import MediaStream
from trackplan.policy.types.enums import ActionKind, Disposition
from trackplan.policy.types.requirements import Requirement


@dataclass(frozen=True)
class StreamAction:
    """What the executor does with one input stream.

    Invariants:
    - TRANSCODE requires target_codec
    - KEEP_AS_IS and DROP must not set target_codec
    """

    kind: ActionKind
    target_codec: str | None = None

    def __post_init__(self) -> None:
        if self.kind == ActionKind.TRANSCODE and not self.target_codec:
            raise ValueError("StreamAction TRANSCODE requires target_codec")
        if self.kind != ActionKind.TRANSCODE and self.target_codec is not None:
            raise ValueError(
                f"StreamAction {self.kind.name} must have target_codec=None, "
                f"got '{self.target_codec}'"
            )

    @classmethod
    def keep(cls) -> StreamAction:
        return cls(ActionKind.KEEP_AS_IS)

    @classmethod
    def transcode(cls, target_codec: str) -> StreamAction:
        return cls(ActionKind.TRANSCODE, target_codec)

    @classmethod
    def drop(cls) -> StreamAction:
        return cls(ActionKind.DROP)

    @property
    def is_kept(self) -> bool:
        return self.kind != ActionKind.DROP

    @property
    def ffmpeg_codec(self) -> str:
        """Value for ffmpeg's ``-c:<n>`` option ("copy" or an encoder name).

        Raises:
            ValueError: If the action drops the stream or the target codec
                has no known encoder.
        """
        if self.kind == ActionKind.KEEP_AS_IS:
            return "copy"
        if self.kind == ActionKind.TRANSCODE:
            encoder = encoder_for(self.target_codec)
            if encoder is None:
                raise ValueError(f"No encoder known for codec '{self.target_codec}'")
            return encoder
        raise ValueError("Dropped streams have no ffmpeg codec")

    def __str__(self) -> str:
        if self.kind == ActionKind.TRANSCODE:
            return f"transcode -> {self.target_codec}"
        return self.kind.value


@dataclass(frozen=True)
class PlannedStream:
    """Planned action for a single input stream, with its justification."""

    stream: MediaStream
    action: StreamAction
    disposition: Disposition
    requirement: Requirement | None
    """Requirement that claimed the stream, None if unclaimed."""

    reason: str

    @property
    def index(self) -> int:
        return self.stream.index

    def to_dict(self) -> dict[str, Any]:
        return {
            "stream_index": self.stream.index,
            "stream_type": self.stream.stream_type.value,
            "codec": self.stream.codec,
            "language": self.stream.language,
            "action": self.action.kind.value,
            "target_codec": self.action.target_codec,
            "disposition": self.disposition.value,
            "requirement": (
                self.requirement.description if self.requirement else None
            ),
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Plan:
    """Immutable per-stream action plan for one input file."""

    output_format: str
    streams: tuple[PlannedStream, ...]
    """One entry per input stream, in container order."""

    source_format: str | None = None
    """Source container extension (e.g. 'mkv'), if known."""

    source_format_supported: bool = True

    @property
    def kept(self) -> tuple[PlannedStream, ...]:
        """Streams mapped into the output, in container order."""
        return tuple(p for p in self.streams if p.action.is_kept)

    @property
    def dropped(self) -> tuple[PlannedStream, ...]:
        return tuple(p for p in self.streams if not p.action.is_kept)

    @property
    def transcoded(self) -> tuple[PlannedStream, ...]:
        return tuple(
            p for p in self.streams if p.action.kind == ActionKind.TRANSCODE
        )

    @property
    def requires_transcode(self) -> bool:
        return bool(self.transcoded)

    @property
    def requires_remux(self) -> bool:
        """True if the source cannot be used as the output unchanged."""
        if not self.source_format_supported:
            return True
        if self.source_format is not None and self.source_format != self.output_format:
            return True
        return bool(self.dropped) or self.requires_transcode

    @property
    def is_passthrough(self) -> bool:
        """True if the source file already satisfies the plan."""
        return not self.requires_remux

    def action_for(self, index: int) -> StreamAction:
        """Return the action for an input stream index.

        Raises:
            KeyError: If the plan has no stream with that index.
        """
        for planned in self.streams:
            if planned.stream.index == index:
                return planned.action
        raise KeyError(index)

    @property
    def summary(self) -> str:
        """Human-readable summary of the plan."""
        if self.is_passthrough:
            return f"No changes required ({self.output_format})"
        parts = []
        kept = len(self.kept) - len(self.transcoded)
        if kept:
            parts.append(f"{kept} copied")
        if self.transcoded:
            parts.append(f"{len(self.transcoded)} transcoded")
        if self.dropped:
            parts.append(f"{len(self.dropped)} dropped")
        if self.source_format and self.source_format != self.output_format:
            parts.append(f"convert {self.source_format} → {self.output_format}")
        return ", ".join(parts) or f"remux to {self.output_format}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_format": self.output_format,
            "source_format": self.source_format,
            "requires_remux": self.requires_remux,
            "requires_transcode": self.requires_transcode,
            "actions": [p.to_dict() for p in self.streams],
        }
