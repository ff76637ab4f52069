"""Structured logging for trackplan.

Configurable text or JSON output with file rotation, plus worker context
tagging for batch runs.
"""

from trackplan.logging.config import configure_logging
from trackplan.logging.context import (
    WorkerContextFilter,
    get_worker_context,
    worker_context,
)
from trackplan.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "WorkerContextFilter",
    "configure_logging",
    "get_worker_context",
    "worker_context",
]
