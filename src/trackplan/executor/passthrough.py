"""Passthrough executor: link or copy files that need no changes."""

import logging
import os
import shutil
from pathlib import Path

from trackplan.executor.interface import ExecutorResult, output_path_for
from trackplan.policy.types import Plan

logger = logging.getLogger(__name__)

PASSTHROUGH_MODES = ("symlink", "copy")


class PassthroughExecutor:
    """Place an unchanged source at the destination.

    Only plans with ``is_passthrough`` set are accepted. The destination
    gets a symlink to the source (default) or a copy of it. An existing
    destination is replaced.
    """

    def __init__(self, mode: str = "symlink") -> None:
        if mode not in PASSTHROUGH_MODES:
            raise ValueError(
                f"mode must be one of {', '.join(PASSTHROUGH_MODES)}, got {mode}"
            )
        self.mode = mode

    def can_handle(self, plan: Plan) -> bool:
        return plan.is_passthrough

    def execute(self, plan: Plan, source: Path, destination: Path) -> ExecutorResult:
        if not self.can_handle(plan):
            return ExecutorResult(
                success=False,
                message="Plan requires remuxing; passthrough not possible",
            )

        output_path = output_path_for(plan, destination)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            if output_path.is_symlink() or output_path.exists():
                output_path.unlink()
            if self.mode == "symlink":
                os.symlink(source.resolve(), output_path)
            else:
                shutil.copy2(source, output_path)
        except OSError as e:
            return ExecutorResult(
                success=False,
                message=f"Failed to {self.mode} {source} to {output_path}: {e}",
            )

        logger.info("Linked %s -> %s (%s)", output_path, source, self.mode)
        return ExecutorResult(
            success=True,
            message=f"{self.mode} to source",
            output_path=output_path,
        )
