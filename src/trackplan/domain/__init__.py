"""Domain models and enums for trackplan.

Usage:
    from trackplan.domain import MediaStream, ProbeResult, StreamType
"""

from .enums import SELECTABLE_STREAM_TYPES, StreamType
from .models import MediaStream, ProbeResult

__all__ = [
    "MediaStream",
    "ProbeResult",
    "SELECTABLE_STREAM_TYPES",
    "StreamType",
]
