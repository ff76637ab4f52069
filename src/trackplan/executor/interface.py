"""Executor protocol and tool lookup utilities.

This module defines the interface for plan executors and the helpers
used to locate external tools.
"""

import shutil
from pathlib import Path
from typing import Protocol

from trackplan.core.errors import ToolNotAvailableError, TrackplanError
from trackplan.policy.types import Plan


class ExecutionError(TrackplanError):
    """Raised when a plan cannot be turned into an executable command."""

    pass


class ExecutorResult:
    """Result of an executor operation."""

    def __init__(
        self,
        success: bool,
        message: str = "",
        output_path: Path | None = None,
    ) -> None:
        self.success = success
        self.message = message
        self.output_path = output_path

    def __repr__(self) -> str:
        return (
            f"ExecutorResult(success={self.success!r}, message={self.message!r}, "
            f"output_path={self.output_path!r})"
        )


class PlanExecutor(Protocol):
    """Protocol for plan executors.

    Executors write the output file a Plan describes. They never decide
    what happens to a stream; that is fixed by the plan.
    """

    def execute(self, plan: Plan, source: Path, destination: Path) -> ExecutorResult:
        """Apply the plan to ``source``, writing ``destination``.

        Args:
            plan: The plan to apply.
            source: Input media file.
            destination: Output path; its suffix is replaced by the plan's
                output format.

        Returns:
            ExecutorResult with success status and the written path.
        """
        ...


def output_path_for(plan: Plan, destination: Path) -> Path:
    """Destination path with the suffix of the plan's output format."""
    return destination.with_suffix(f".{plan.output_format}")


def get_tool_path(tool_name: str) -> Path | None:
    """Get path to a tool, or None if not available.

    Configured paths (environment or config file) win over a PATH lookup.
    """
    from trackplan.config import get_config

    configured = get_config().get_tool_path(tool_name)
    if configured is not None:
        return configured
    found = shutil.which(tool_name)
    return Path(found) if found else None


def require_tool(tool_name: str) -> Path:
    """Get path to a required tool, raising an error if not available.

    Raises:
        ToolNotAvailableError: If the tool is not configured or on PATH.
    """
    path = get_tool_path(tool_name)
    if path is None:
        raise ToolNotAvailableError(tool_name)
    return path
