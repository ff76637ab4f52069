"""Shared helpers for CLI commands: policy and introspector setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from trackplan.cli.exit_codes import ExitCode
from trackplan.cli.output import error_exit
from trackplan.config import TrackplanConfig
from trackplan.core.errors import ToolNotAvailableError
from trackplan.introspector import FFprobeIntrospector, MediaIntrospector
from trackplan.policy import PlanningError, PolicyValidationError, load_policy
from trackplan.policy.types import PolicySchema

logger = logging.getLogger(__name__)


def get_config_from_context(ctx: click.Context) -> TrackplanConfig:
    """Return the config loaded by the main group."""
    return ctx.obj["config"]


def load_policy_or_exit(
    policy_path: Path | None,
    config: TrackplanConfig,
    json_output: bool = False,
) -> PolicySchema:
    """Load a policy, falling back to the configured default.

    Exits with POLICY_VALIDATION_ERROR if no policy is given or the file
    is invalid.
    """
    path = policy_path or config.processing.policy
    if path is None:
        error_exit(
            "No policy given. Use --policy or set TRACKPLAN_POLICY.",
            ExitCode.POLICY_VALIDATION_ERROR,
            json_output,
        )
    try:
        policy = load_policy(path)
    except FileNotFoundError as e:
        error_exit(str(e), ExitCode.POLICY_VALIDATION_ERROR, json_output)
    except PolicyValidationError as e:
        error_exit(str(e), ExitCode.POLICY_VALIDATION_ERROR, json_output)
    logger.debug("Using policy %s", path)
    return policy


def get_introspector_or_exit(
    ctx: click.Context, json_output: bool = False
) -> MediaIntrospector:
    """Return the introspector for this invocation.

    An introspector already placed in ``ctx.obj`` wins; otherwise ffprobe
    is used with the configured path and timeout.
    """
    if ctx.obj.get("introspector") is not None:
        return ctx.obj["introspector"]
    config = get_config_from_context(ctx)
    try:
        return FFprobeIntrospector(
            ffprobe_path=config.tools.ffprobe,
            timeout=config.processing.ffprobe_timeout,
        )
    except ToolNotAvailableError as e:
        error_exit(str(e), ExitCode.TOOL_NOT_AVAILABLE, json_output)


def planning_error_exit(error: PlanningError, json_output: bool = False) -> NoReturn:
    """Report every planning failure and exit with PLANNING_FAILED."""
    if json_output:
        error_exit(
            str(error),
            ExitCode.PLANNING_FAILED,
            json_output=True,
            details=error.to_dict(),
        )
    click.echo("Error: No valid plan exists:", err=True)
    for failure in error.failures:
        click.echo(f"  - {failure.message}", err=True)
    sys.exit(int(ExitCode.PLANNING_FAILED))
