"""Capability set: what the executor may write."""

from __future__ import annotations

from dataclasses import dataclass

from trackplan.core.codecs import (
    codec_in,
    codec_stream_type,
    dedupe_codecs,
    get_codec_info,
)
from trackplan.domain import StreamType


@dataclass(frozen=True)
class CapabilitySet:
    """Allow-lists of container formats and codecs. Constant for a run.

    Both lists are ordered: the first format is the default output format
    and, per stream type, the first encodable codec is the transcode target.
    """

    supported_formats: tuple[str, ...]
    supported_codecs: tuple[str, ...]

    def __post_init__(self) -> None:
        formats: list[str] = []
        for fmt in self.supported_formats:
            normalized = fmt.strip().lstrip(".").casefold()
            if normalized and normalized not in formats:
                formats.append(normalized)
        if not formats:
            raise ValueError("At least one supported format is required")
        object.__setattr__(self, "supported_formats", tuple(formats))
        object.__setattr__(
            self, "supported_codecs", dedupe_codecs(self.supported_codecs)
        )

    @property
    def default_format(self) -> str:
        return self.supported_formats[0]

    def supports_format(self, fmt: str | None) -> bool:
        if not fmt:
            return False
        return fmt.strip().lstrip(".").casefold() in self.supported_formats

    def supports_codec(self, codec: str | None) -> bool:
        return codec_in(codec, self.supported_codecs)

    def codecs_for(self, stream_type: StreamType) -> tuple[str, ...]:
        """Supported codecs of one stream type, in preference order."""
        return tuple(
            c for c in self.supported_codecs if codec_stream_type(c) == stream_type
        )

    def transcode_target(self, stream_type: StreamType) -> str | None:
        """First supported codec of this type that has an encoder."""
        for codec in self.codecs_for(stream_type):
            info = get_codec_info(codec)
            if info is not None and info.can_encode:
                return codec
        return None
