"""CLI inspect command: show the stream catalog of a media file."""

import logging
from pathlib import Path

import click

from trackplan.cli.exit_codes import ExitCode
from trackplan.cli.helpers import get_introspector_or_exit
from trackplan.cli.output import error_exit
from trackplan.introspector import ProbeFailedError, format_human, format_json

logger = logging.getLogger(__name__)


@click.command("inspect")
@click.argument("file", type=click.Path(path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def inspect_command(ctx: click.Context, file: Path, json_output: bool) -> None:
    """Display the streams of a media file.

    FILE is the path to the media file to inspect.
    """
    if not file.exists():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    introspector = get_introspector_or_exit(ctx, json_output)
    try:
        result = introspector.get_file_info(file)
    except ProbeFailedError as e:
        error_exit(f"Could not probe {file}: {e}", ExitCode.PROBE_FAILED, json_output)

    click.echo(format_json(result) if json_output else format_human(result))
