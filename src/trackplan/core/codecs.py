"""Centralized codec registry and utilities.

Single source of truth for codec knowledge in trackplan:
- Codec alias groups for matching/normalization
- Registry of known codecs with their stream type and ffmpeg encoder
- Membership checks against a configured codec allow-list

Policies name codecs the way ffmpeg lists them (``HEVC``, ``MPEG2VIDEO``,
``AAC``), probes report ffprobe ``codec_name`` values (``hevc``,
``mpeg2video``, ``aac``). Everything here compares on canonical names.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from trackplan.domain.enums import StreamType

logger = logging.getLogger(__name__)

# =============================================================================
# Codec Alias Groups
# =============================================================================
# Canonical name -> every spelling that should be treated as the same codec.

CODEC_ALIASES: dict[str, frozenset[str]] = {
    # Video
    "hevc": frozenset({"hevc", "h265", "h.265", "x265", "hvc1", "hev1"}),
    "h264": frozenset({"h264", "h.264", "avc", "avc1", "x264"}),
    "h261": frozenset({"h261", "h.261"}),
    "h263": frozenset({"h263", "h.263"}),
    "vc1": frozenset({"vc1", "vc-1", "wvc1", "wmv3"}),
    "mpeg1video": frozenset({"mpeg1video", "mpeg1", "mpeg-1"}),
    "mpeg2video": frozenset({"mpeg2video", "mpeg2", "mpeg-2"}),
    "mpeg4": frozenset({"mpeg4", "mp4v", "xvid", "divx"}),
    "vp8": frozenset({"vp8"}),
    "vp9": frozenset({"vp9", "vp09"}),
    "av1": frozenset({"av1", "av01", "libaom-av1"}),
    # Audio
    "aac": frozenset({"aac", "aac_latm", "mp4a"}),
    "ac3": frozenset({"ac3", "ac-3", "a52"}),
    "eac3": frozenset({"eac3", "e-ac-3", "ec3"}),
    "dts": frozenset({"dts", "dca"}),
    "truehd": frozenset({"truehd", "dolby truehd", "mlp"}),
    "flac": frozenset({"flac"}),
    "opus": frozenset({"opus"}),
    "mp3": frozenset({"mp3", "mp3float"}),
    "mp2": frozenset({"mp2", "mp2float"}),
    "vorbis": frozenset({"vorbis"}),
    "alac": frozenset({"alac"}),
    "pcm_s16le": frozenset({"pcm_s16le"}),
    "pcm_s24le": frozenset({"pcm_s24le"}),
    # Subtitle
    "subrip": frozenset({"subrip", "srt"}),
    "ass": frozenset({"ass", "ssa"}),
    "webvtt": frozenset({"webvtt", "vtt"}),
    "mov_text": frozenset({"mov_text", "tx3g"}),
    "hdmv_pgs_subtitle": frozenset({"hdmv_pgs_subtitle", "pgssub", "pgs"}),
    "dvd_subtitle": frozenset({"dvd_subtitle", "dvdsub", "vobsub"}),
}

# Reverse lookup: any spelling -> canonical name
_ALIAS_INDEX: dict[str, str] = {
    alias: canonical
    for canonical, aliases in CODEC_ALIASES.items()
    for alias in aliases
}


# =============================================================================
# Codec Registry
# =============================================================================


@dataclass(frozen=True)
class CodecInfo:
    """What trackplan knows about one codec."""

    name: str
    """Canonical codec name."""

    stream_type: StreamType

    encoder: str | None
    """ffmpeg encoder used to produce this codec, None if decode-only."""

    @property
    def can_encode(self) -> bool:
        return self.encoder is not None


_REGISTRY: dict[str, CodecInfo] = {
    info.name: info
    for info in (
        CodecInfo("hevc", StreamType.VIDEO, "libx265"),
        CodecInfo("h264", StreamType.VIDEO, "libx264"),
        CodecInfo("h261", StreamType.VIDEO, "h261"),
        CodecInfo("h263", StreamType.VIDEO, "h263"),
        CodecInfo("vc1", StreamType.VIDEO, None),
        CodecInfo("mpeg1video", StreamType.VIDEO, "mpeg1video"),
        CodecInfo("mpeg2video", StreamType.VIDEO, "mpeg2video"),
        CodecInfo("mpeg4", StreamType.VIDEO, "mpeg4"),
        CodecInfo("vp8", StreamType.VIDEO, "libvpx"),
        CodecInfo("vp9", StreamType.VIDEO, "libvpx-vp9"),
        CodecInfo("av1", StreamType.VIDEO, "libsvtav1"),
        CodecInfo("aac", StreamType.AUDIO, "aac"),
        CodecInfo("ac3", StreamType.AUDIO, "ac3"),
        CodecInfo("eac3", StreamType.AUDIO, "eac3"),
        CodecInfo("dts", StreamType.AUDIO, "dca"),
        CodecInfo("truehd", StreamType.AUDIO, None),
        CodecInfo("flac", StreamType.AUDIO, "flac"),
        CodecInfo("opus", StreamType.AUDIO, "libopus"),
        CodecInfo("mp3", StreamType.AUDIO, "libmp3lame"),
        CodecInfo("mp2", StreamType.AUDIO, "mp2"),
        CodecInfo("vorbis", StreamType.AUDIO, "libvorbis"),
        CodecInfo("alac", StreamType.AUDIO, "alac"),
        CodecInfo("pcm_s16le", StreamType.AUDIO, "pcm_s16le"),
        CodecInfo("pcm_s24le", StreamType.AUDIO, "pcm_s24le"),
        CodecInfo("subrip", StreamType.SUBTITLE, "srt"),
        CodecInfo("ass", StreamType.SUBTITLE, "ass"),
        CodecInfo("webvtt", StreamType.SUBTITLE, "webvtt"),
        CodecInfo("mov_text", StreamType.SUBTITLE, "mov_text"),
        CodecInfo("hdmv_pgs_subtitle", StreamType.SUBTITLE, None),
        CodecInfo("dvd_subtitle", StreamType.SUBTITLE, "dvdsub"),
    )
}


# =============================================================================
# Normalization Functions
# =============================================================================


def normalize_codec(codec: str | None) -> str:
    """Normalize a codec name for comparison.

    Args:
        codec: Codec name from ffprobe or a policy file.

    Returns:
        Casefolded, stripped codec name ("" for None).
    """
    if codec is None:
        return ""
    return codec.casefold().strip()


def canonical_codec(codec: str | None) -> str:
    """Get the canonical name for a codec.

    Args:
        codec: Codec name in any known spelling.

    Returns:
        Canonical codec name (the alias group key), or the normalized
        input if the codec is not in any alias group.
    """
    normalized = normalize_codec(codec)
    return _ALIAS_INDEX.get(normalized, normalized)


def get_codec_info(codec: str | None) -> CodecInfo | None:
    """Look up registry information for a codec, or None if unknown."""
    return _REGISTRY.get(canonical_codec(codec))


def is_known_codec(codec: str) -> bool:
    return get_codec_info(codec) is not None


def codec_stream_type(codec: str | None) -> StreamType | None:
    """Return the stream type a codec produces, or None if unknown."""
    info = get_codec_info(codec)
    return info.stream_type if info else None


def encoder_for(codec: str | None) -> str | None:
    """Return the ffmpeg encoder name for a codec, or None."""
    info = get_codec_info(codec)
    return info.encoder if info else None


# =============================================================================
# Matching Functions
# =============================================================================


def codecs_match(left: str | None, right: str | None) -> bool:
    """Check if two codec names refer to the same codec (alias-aware)."""
    if not left or not right:
        return False
    return canonical_codec(left) == canonical_codec(right)


def codec_in(codec: str | None, allowed: Iterable[str]) -> bool:
    """Check if a codec is a member of an allow-list (alias-aware).

    Args:
        codec: Codec name to check.
        allowed: Codec allow-list in any spelling.

    Returns:
        True if any allow-list entry names the same codec.
    """
    return any(codecs_match(codec, candidate) for candidate in allowed)


def dedupe_codecs(codecs: Iterable[str]) -> tuple[str, ...]:
    """Drop alias duplicates from a codec list, keeping first occurrences.

    Unknown codecs are kept (pass-through only) and logged at warning level.
    """
    seen: set[str] = set()
    result: list[str] = []
    for codec in codecs:
        canonical = canonical_codec(codec)
        if not canonical:
            continue
        if canonical in seen:
            logger.debug("Ignoring duplicate codec entry '%s'", codec)
            continue
        if canonical not in _REGISTRY:
            logger.warning(
                "Codec '%s' is not a recognized codec; streams using it can be "
                "kept as-is but it will never be chosen as a transcode target.",
                codec,
            )
        seen.add(canonical)
        result.append(codec)
    return tuple(result)
