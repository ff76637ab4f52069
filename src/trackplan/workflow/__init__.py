"""File processing workflow."""

from trackplan.workflow.processor import (
    MEDIA_EXTENSIONS,
    FileProcessor,
    FileResult,
    FileStatus,
    collect_jobs,
)

__all__ = [
    "MEDIA_EXTENSIONS",
    "FileProcessor",
    "FileResult",
    "FileStatus",
    "collect_jobs",
]
