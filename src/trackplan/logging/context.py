"""Worker context for batch logging.

Each batch worker thread tags its log records with a worker number and a
file sequence number, so interleaved output from parallel runs can be
told apart. Context lives in contextvars and is therefore per-thread.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

_worker_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trackplan_worker_id", default=None
)
_file_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trackplan_file_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trackplan_file_path", default=None
)


def get_worker_context() -> tuple[str | None, str | None, str | None]:
    """Return (worker_id, file_id, file_path) for the current thread."""
    return _worker_id.get(), _file_id.get(), _file_path.get()


@contextmanager
def worker_context(
    worker_id: str,
    file_id: str | None = None,
    file_path: Path | str | None = None,
) -> Iterator[None]:
    """Tag log records emitted inside the block.

    Example:
        with worker_context("01", "F003", src):
            logger.info("Processing")  # "[W01:F003] ... Processing"
    """
    tokens = (
        _worker_id.set(worker_id),
        _file_id.set(file_id),
        _file_path.set(str(file_path) if file_path is not None else None),
    )
    try:
        yield
    finally:
        _file_path.reset(tokens[2])
        _file_id.reset(tokens[1])
        _worker_id.reset(tokens[0])


class WorkerContextFilter(logging.Filter):
    """Copy the worker context onto every log record.

    Sets ``worker_id``, ``file_id`` and ``file_path`` for the JSON
    formatter, and ``worker_tag`` ("[W01:F001] ", "[W01] " or "") for
    the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        worker_id, file_id, file_path = get_worker_context()
        record.worker_id = worker_id
        record.file_id = file_id
        record.file_path = file_path

        if worker_id and file_id:
            record.worker_tag = f"[W{worker_id}:{file_id}] "
        elif worker_id:
            record.worker_tag = f"[W{worker_id}] "
        else:
            record.worker_tag = ""
        return True
