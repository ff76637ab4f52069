"""CLI plan command: evaluate a policy against one file without writing."""

import json
import logging
from pathlib import Path

import click

from trackplan.cli.exit_codes import ExitCode
from trackplan.cli.helpers import (
    get_config_from_context,
    get_introspector_or_exit,
    load_policy_or_exit,
    planning_error_exit,
)
from trackplan.cli.output import error_exit
from trackplan.introspector import ProbeFailedError
from trackplan.policy import PlanningError, evaluate_policy
from trackplan.policy.types import Plan

logger = logging.getLogger(__name__)


def format_plan_human(file: Path, plan: Plan) -> str:
    """Render a plan as an aligned table."""
    lines = [f"File: {file}", f"Output format: {plan.output_format}", ""]
    for planned in plan.streams:
        lines.append(
            f"  {planned.stream.label:<28} {str(planned.action):<22} "
            f"{planned.disposition.value:<14} {planned.reason}"
        )
    lines.append("")
    lines.append(f"Summary: {plan.summary}")
    return "\n".join(lines)


@click.command("plan")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--policy",
    "-p",
    "policy_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Policy file (YAML or TOML). Defaults to the configured policy.",
)
@click.option(
    "--drop-optional",
    is_flag=True,
    help="Drop optional streams instead of keeping them.",
)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan_command(
    ctx: click.Context,
    file: Path,
    policy_path: Path | None,
    drop_optional: bool,
    json_output: bool,
) -> None:
    """Show what would happen to each stream of FILE.

    Nothing is written. Exits with a planning error code if the policy
    cannot be satisfied, listing every failure.
    """
    config = get_config_from_context(ctx)
    policy = load_policy_or_exit(policy_path, config, json_output)

    if not file.exists() and ctx.obj.get("introspector") is None:
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    introspector = get_introspector_or_exit(ctx, json_output)
    try:
        probe_result = introspector.get_file_info(file)
    except ProbeFailedError as e:
        error_exit(f"Could not probe {file}: {e}", ExitCode.PROBE_FAILED, json_output)

    keep_optional = config.processing.keep_optional and not drop_optional
    try:
        plan = evaluate_policy(policy, probe_result, keep_optional=keep_optional)
    except PlanningError as e:
        planning_error_exit(e, json_output)

    if json_output:
        click.echo(
            json.dumps(
                {"status": "completed", "file": str(file), "plan": plan.to_dict()},
                indent=2,
            )
        )
    else:
        click.echo(format_plan_human(file, plan))
