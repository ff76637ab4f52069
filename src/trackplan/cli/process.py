"""CLI process command: apply a policy to a file or a whole tree."""

from __future__ import annotations

import json
import logging
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import click

from trackplan.cli.exit_codes import ExitCode
from trackplan.cli.helpers import (
    get_config_from_context,
    get_introspector_or_exit,
    load_policy_or_exit,
)
from trackplan.cli.output import error_exit
from trackplan.core.errors import ToolNotAvailableError
from trackplan.executor import FFmpegPlanExecutor, PassthroughExecutor, require_tool
from trackplan.introspector import ProbeFailedError
from trackplan.logging import worker_context
from trackplan.policy import PlanningError
from trackplan.workflow import FileProcessor, FileResult, FileStatus, collect_jobs

logger = logging.getLogger(__name__)


def get_max_workers() -> int:
    """Calculate maximum worker count (half CPU cores, minimum 1)."""
    cpu_count = os.cpu_count() or 2
    return max(1, cpu_count // 2)


def resolve_worker_count(requested: int | None, config_default: int | None) -> int:
    """Resolve effective worker count with capping.

    Args:
        requested: Worker count from CLI (None if not specified).
        config_default: Worker count from configuration (None for the cap).

    Returns:
        Effective worker count, at least 1 and at most get_max_workers().
    """
    max_workers = get_max_workers()
    effective = requested if requested is not None else config_default
    if effective is None:
        return max_workers

    if effective > max_workers:
        logger.warning(
            "Requested %d workers exceeds cap of %d (half of %s cores). Using %d.",
            effective,
            max_workers,
            os.cpu_count(),
            max_workers,
        )
        return max_workers

    return max(1, effective)


def _run_batch(
    processor: FileProcessor,
    jobs: list[tuple[Path, Path]],
    workers: int,
    dry_run: bool,
) -> list[FileResult]:
    """Process jobs, in parallel when more than one worker is allowed.

    Results are returned in job order.
    """
    file_id_width = len(str(len(jobs)))

    def run(position: int, source: Path, destination: Path) -> FileResult:
        worker_id = f"{(position % workers) + 1:02d}"
        file_id = f"F{position + 1:0{file_id_width}d}"
        with worker_context(worker_id, file_id, source):
            logger.info("=== FILE %s: %s", file_id, source)
            return processor.process_file(source, destination, dry_run=dry_run)

    if workers == 1 or len(jobs) == 1:
        return [run(i, src, dst) for i, (src, dst) in enumerate(jobs)]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(run, i, src, dst) for i, (src, dst) in enumerate(jobs)
        ]
        return [future.result() for future in futures]


def _exit_code_for(results: list[FileResult]) -> ExitCode:
    failed = [r for r in results if r.status == FileStatus.FAILED]
    if not failed:
        return ExitCode.SUCCESS
    if any(r.error is None for r in failed):
        return ExitCode.EXECUTION_FAILED
    if any(isinstance(r.error, PlanningError) for r in failed):
        return ExitCode.PLANNING_FAILED
    if any(isinstance(r.error, ProbeFailedError) for r in failed):
        return ExitCode.PROBE_FAILED
    return ExitCode.GENERAL_ERROR


@click.command("process")
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
@click.option(
    "--policy",
    "-p",
    "policy_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Policy file (YAML or TOML). Defaults to the configured policy.",
)
@click.option("--dry-run", is_flag=True, help="Plan only, write nothing.")
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Files processed in parallel (default: half the CPU cores).",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def process_command(
    ctx: click.Context,
    source: Path,
    destination: Path,
    policy_path: Path | None,
    dry_run: bool,
    workers: int | None,
    json_output: bool,
) -> None:
    """Apply a policy to SOURCE, writing results under DESTINATION.

    SOURCE may be a single file or a directory; a directory is mirrored
    into DESTINATION. Files that already satisfy the policy are linked
    instead of re-muxed.
    """
    config = get_config_from_context(ctx)
    policy = load_policy_or_exit(policy_path, config, json_output)

    try:
        jobs = collect_jobs(source, destination)
    except FileNotFoundError as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)

    if not jobs:
        message = f"No media files found in {source}"
        if json_output:
            click.echo(json.dumps({"status": "completed", "message": message}))
        else:
            click.echo(message)
        return

    introspector = get_introspector_or_exit(ctx, json_output)
    executor = ctx.obj.get("executor")
    if executor is None:
        timeout = config.processing.ffmpeg_timeout
        if dry_run:
            executor = FFmpegPlanExecutor(config.tools.ffmpeg, timeout=timeout)
        else:
            try:
                executor = FFmpegPlanExecutor(require_tool("ffmpeg"), timeout=timeout)
            except ToolNotAvailableError as e:
                error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)

    processor = FileProcessor(
        policy=policy,
        introspector=introspector,
        executor=executor,
        passthrough=PassthroughExecutor(config.processing.passthrough),
        keep_optional=config.processing.keep_optional,
    )
    effective_workers = resolve_worker_count(workers, config.processing.workers)
    logger.info(
        "Processing %d file(s) with %d worker(s)%s",
        len(jobs),
        effective_workers,
        " (dry run)" if dry_run else "",
    )

    results = _run_batch(processor, jobs, effective_workers, dry_run)
    counts = Counter(r.status.value for r in results)
    exit_code = _exit_code_for(results)

    if json_output:
        status = "completed" if exit_code == ExitCode.SUCCESS else "failed"
        click.echo(
            json.dumps(
                {
                    "status": status,
                    "summary": {s.value: counts.get(s.value, 0) for s in FileStatus},
                    "files": [r.to_dict() for r in results],
                },
                indent=2,
            )
        )
    else:
        for result in results:
            click.echo(
                f"[{result.status.value}] {result.source} -> {result.destination}: "
                f"{result.message}"
            )
        summary = ", ".join(f"{counts.get(s.value, 0)} {s.value}" for s in FileStatus)
        click.echo(f"Processed {len(results)} file(s): {summary}")

    if exit_code != ExitCode.SUCCESS:
        ctx.exit(int(exit_code))
