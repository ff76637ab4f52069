"""CLI module for trackplan."""

import logging
from pathlib import Path

import click

from trackplan.cli.exit_codes import ExitCode
from trackplan.cli.output import error_exit
from trackplan.config import ConfigError, get_config
from trackplan.logging import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the loaded config plus CLI overrides."""
    config = ctx.obj["config"]
    try:
        logging_config = config.logging.with_overrides(
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)
    configure_logging(logging_config)


@click.group()
@click.version_option(package_name="trackplan")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Config file (default: ~/.trackplan/config.toml).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """trackplan - plan and apply stream-level policies to media files."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path=config_path)
        except ConfigError as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    _configure_logging(ctx, log_level, log_file, log_json)
    logger.debug("trackplan starting: command=%s", ctx.invoked_subcommand)


def _register_commands() -> None:
    from trackplan.cli.check_policy import check_policy_command
    from trackplan.cli.inspect import inspect_command
    from trackplan.cli.plan import plan_command
    from trackplan.cli.process import process_command

    main.add_command(inspect_command)
    main.add_command(plan_command)
    main.add_command(process_command)
    main.add_command(check_policy_command)


_register_commands()
