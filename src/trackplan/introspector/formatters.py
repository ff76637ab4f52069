"""Formatters for probe results.

Functions to render a ProbeResult for human-readable or JSON output,
shared by the ``inspect`` and ``plan`` commands.
"""

import json
from typing import Any

from trackplan.domain import MediaStream, ProbeResult, StreamType

_SECTION_TITLES: tuple[tuple[StreamType, str], ...] = (
    (StreamType.VIDEO, "Video"),
    (StreamType.AUDIO, "Audio"),
    (StreamType.SUBTITLE, "Subtitles"),
)


def format_stream_line(stream: MediaStream) -> str:
    """Format a single stream for human output."""
    parts = [f"#{stream.index}", f"[{stream.stream_type.value}]", stream.codec]
    if stream.language:
        parts.append(stream.language)
    if stream.title:
        parts.append(f'"{stream.title}"')
    return " ".join(parts)


def format_human(result: ProbeResult) -> str:
    """Format a probe result for terminal output."""
    lines: list[str] = [f"File: {result.file_path}"]
    if result.container_format:
        container = result.container_format.split(",")[0].title()
        lines.append(f"Container: {container}")
    lines.append("")
    lines.append("Streams:")

    grouped = {stream_type for stream_type, _ in _SECTION_TITLES}
    for stream_type, title in _SECTION_TITLES:
        streams = result.streams_of(stream_type)
        if streams:
            lines.append(f"  {title}:")
            lines.extend(f"    {format_stream_line(s)}" for s in streams)

    other = [s for s in result.streams if s.stream_type not in grouped]
    if other:
        lines.append("  Other:")
        lines.extend(f"    {format_stream_line(s)}" for s in other)

    if not result.streams:
        lines.append("  (no streams found)")

    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in result.warnings:
            lines.append(f"  - {warning}")

    return "\n".join(lines)


def stream_to_dict(stream: MediaStream) -> dict[str, Any]:
    """Convert a MediaStream to a JSON-serializable dictionary."""
    return {
        "index": stream.index,
        "type": stream.stream_type.value,
        "codec": stream.codec,
        "language": stream.language,
        "title": stream.title,
    }


def format_json(result: ProbeResult) -> str:
    """Format a probe result as JSON."""
    output = {
        "file": str(result.file_path),
        "container_format": result.container_format,
        "streams": [stream_to_dict(s) for s in result.streams],
        "warnings": list(result.warnings),
    }
    return json.dumps(output, indent=2)
