"""Introspector module for trackplan.

This module provides stream catalog extraction:

- MediaIntrospector: Protocol defining the introspection interface
- FFprobeIntrospector: Production implementation using ffprobe
- StubIntrospector: Canned catalogs for testing and dry runs
- ProbeFailedError: Exception for probe failures
"""

from trackplan.introspector.ffprobe import FFprobeIntrospector
from trackplan.introspector.formatters import (
    format_human,
    format_json,
    format_stream_line,
    stream_to_dict,
)
from trackplan.introspector.interface import MediaIntrospector, ProbeFailedError
from trackplan.introspector.parsers import parse_ffprobe_output
from trackplan.introspector.stub import StubIntrospector

__all__ = [
    "MediaIntrospector",
    "ProbeFailedError",
    "FFprobeIntrospector",
    "StubIntrospector",
    "parse_ffprobe_output",
    # Formatters
    "format_human",
    "format_json",
    "format_stream_line",
    "stream_to_dict",
]
