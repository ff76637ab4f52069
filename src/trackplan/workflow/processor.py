"""Per-file workflow: probe, plan, then execute.

FileProcessor ties an introspector, a policy and the executors together.
Planning failures and probe failures are reported per file as a failed
FileResult so one bad file does not stop a batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from trackplan.executor import (
    ExecutorResult,
    PassthroughExecutor,
    PlanExecutor,
    output_path_for,
)
from trackplan.introspector import MediaIntrospector, ProbeFailedError
from trackplan.policy.evaluator import PlanningError, evaluate_policy
from trackplan.policy.types import Plan, PolicySchema

logger = logging.getLogger(__name__)

# Extensions treated as media when walking a source tree
MEDIA_EXTENSIONS = frozenset(
    {
        ".mkv",
        ".mka",
        ".mp4",
        ".m4v",
        ".mov",
        ".avi",
        ".webm",
        ".wmv",
        ".flv",
        ".ts",
        ".m2ts",
        ".mpg",
        ".mpeg",
        ".vob",
        ".ogv",
    }
)


class FileStatus(Enum):
    """Outcome of processing one file."""

    TRANSCODED = "transcoded"  # Written by ffmpeg
    LINKED = "linked"  # Passthrough symlink or copy
    PLANNED = "planned"  # Dry run, nothing written
    FAILED = "failed"


@dataclass(frozen=True)
class FileResult:
    """Result of processing one source file."""

    source: Path
    destination: Path
    status: FileStatus
    plan: Plan | None = None
    error: Exception | None = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status != FileStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "source": str(self.source),
            "destination": str(self.destination),
            "status": self.status.value,
            "message": self.message,
        }
        if self.plan is not None:
            result["plan"] = self.plan.to_dict()
        if isinstance(self.error, PlanningError):
            result["error"] = self.error.to_dict()
        elif self.error is not None:
            result["error"] = {"message": str(self.error)}
        return result


def collect_jobs(source: Path, destination: Path) -> list[tuple[Path, Path]]:
    """Pair every media file under ``source`` with a path under ``destination``.

    A single source file maps to ``destination`` itself, or to
    ``destination / source.name`` when ``destination`` is an existing
    directory. A source directory is mirrored: relative paths are kept and
    only files with a media extension are selected. Hidden files and
    directories are skipped.

    Raises:
        FileNotFoundError: If ``source`` does not exist.
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        if destination.is_dir():
            return [(source, destination / source.name)]
        return [(source, destination)]

    jobs: list[tuple[Path, Path]] = []
    for path in sorted(source.rglob("*")):
        relative = path.relative_to(source)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if not path.is_file() or path.suffix.lower() not in MEDIA_EXTENSIONS:
            continue
        jobs.append((path, destination / relative))
    return jobs


class FileProcessor:
    """Probe, plan and execute a policy for individual files."""

    def __init__(
        self,
        policy: PolicySchema,
        introspector: MediaIntrospector,
        executor: PlanExecutor,
        passthrough: PassthroughExecutor | None = None,
        keep_optional: bool = True,
    ) -> None:
        """Initialize the processor.

        Args:
            policy: Validated policy applied to every file.
            introspector: Source of stream catalogs.
            executor: Executor for plans that need remuxing.
            passthrough: Executor for plans that need no changes. If None,
                those plans also go through ``executor``.
            keep_optional: If False, optional-keep streams are dropped.
        """
        self.policy = policy
        self.introspector = introspector
        self.executor = executor
        self.passthrough = passthrough
        self.keep_optional = keep_optional

    def plan_file(self, path: Path) -> Plan:
        """Probe a file and evaluate the policy against it.

        Raises:
            ProbeFailedError: If the file cannot be probed.
            PlanningError: If the policy cannot be satisfied.
        """
        probe_result = self.introspector.get_file_info(path)
        for warning in probe_result.warnings:
            logger.warning("%s: %s", path, warning)
        return evaluate_policy(
            self.policy, probe_result, keep_optional=self.keep_optional
        )

    def process_file(
        self, source: Path, destination: Path, dry_run: bool = False
    ) -> FileResult:
        """Plan and (unless dry_run) execute one file.

        Args:
            source: Input media file.
            destination: Output path; the suffix follows the plan's format.
            dry_run: Only plan; write nothing.

        Returns:
            FileResult describing the outcome.
        """
        logger.info("Processing %s", source)
        try:
            plan = self.plan_file(source)
        except (ProbeFailedError, PlanningError) as e:
            logger.error("Cannot plan %s: %s", source, e)
            return FileResult(
                source=source,
                destination=destination,
                status=FileStatus.FAILED,
                error=e,
                message=str(e),
            )

        output_path = output_path_for(plan, destination)
        if dry_run:
            return FileResult(
                source=source,
                destination=output_path,
                status=FileStatus.PLANNED,
                plan=plan,
                message=plan.summary,
            )

        if plan.is_passthrough and self.passthrough is not None:
            result = self.passthrough.execute(plan, source, destination)
            status = FileStatus.LINKED
        else:
            result = self.executor.execute(plan, source, destination)
            status = FileStatus.TRANSCODED

        return self._to_file_result(source, output_path, plan, status, result)

    @staticmethod
    def _to_file_result(
        source: Path,
        output_path: Path,
        plan: Plan,
        status: FileStatus,
        result: ExecutorResult,
    ) -> FileResult:
        if not result.success:
            logger.error("Failed to write %s: %s", output_path, result.message)
            return FileResult(
                source=source,
                destination=output_path,
                status=FileStatus.FAILED,
                plan=plan,
                message=result.message,
            )
        return FileResult(
            source=source,
            destination=result.output_path or output_path,
            status=status,
            plan=plan,
            message=result.message,
        )
