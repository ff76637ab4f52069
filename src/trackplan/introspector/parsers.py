"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe JSON data into trackplan domain objects.
All functions are pure (no I/O, no side effects) for easy testing.
"""

import logging
from pathlib import Path
from typing import Any

from trackplan.domain import MediaStream, ProbeResult
from trackplan.introspector.mappings import map_stream_type
from trackplan.language import normalize_language

logger = logging.getLogger(__name__)


def sanitize_string(value: str | None) -> str | None:
    """Sanitize a string by replacing invalid UTF-8 characters."""
    if value is None:
        return None
    return value.encode("utf-8", errors="replace").decode("utf-8")


def parse_stream(stream: dict[str, Any]) -> MediaStream | None:
    """Parse a single ffprobe stream entry.

    Returns:
        MediaStream, or None if the entry has no usable index.
    """
    index = stream.get("index")
    if not isinstance(index, int) or isinstance(index, bool) or index < 0:
        return None

    tags = stream.get("tags") or {}
    return MediaStream(
        index=index,
        stream_type=map_stream_type(stream.get("codec_type")),
        codec=(stream.get("codec_name") or "unknown").casefold(),
        language=normalize_language(tags.get("language")),
        title=sanitize_string(tags.get("title")),
    )


def parse_streams(
    streams: list[dict[str, Any]],
    file_path: str | None = None,
) -> tuple[list[MediaStream], list[str]]:
    """Parse ffprobe stream entries.

    Entries without a valid index and entries that repeat an index are
    skipped and reported as warnings.

    Returns:
        Tuple of (streams, warnings).
    """
    parsed: list[MediaStream] = []
    warnings: list[str] = []
    seen: set[int] = set()
    context = f" in {file_path}" if file_path else ""

    for position, entry in enumerate(streams):
        media_stream = parse_stream(entry)
        if media_stream is None:
            message = f"Skipping stream entry {position} without a valid index"
            logger.warning("%s%s", message, context)
            warnings.append(message)
            continue
        if media_stream.index in seen:
            message = f"Duplicate stream index {media_stream.index}, skipping"
            logger.warning("%s%s", message, context)
            warnings.append(message)
            continue
        seen.add(media_stream.index)
        parsed.append(media_stream)

    return parsed, warnings


def parse_ffprobe_output(path: Path, data: dict[str, Any]) -> ProbeResult:
    """Parse ffprobe JSON output into a ProbeResult.

    Args:
        path: Path to the media file.
        data: Parsed ffprobe JSON output.

    Returns:
        ProbeResult with streams and warnings.
    """
    format_info = data.get("format") or {}
    container_format = format_info.get("format_name")

    streams, warnings = parse_streams(data.get("streams", []), str(path))
    if not streams:
        warnings.append("No streams found in file")

    return ProbeResult(
        file_path=path,
        container_format=container_format,
        streams=tuple(streams),
        warnings=tuple(warnings),
    )
