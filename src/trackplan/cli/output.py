"""Unified CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from trackplan.cli.exit_codes import ExitCode


@dataclass
class CLIResult:
    """Result object for CLI operations.

    Provides consistent JSON serialization for command results.
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: ExitCode | int = ExitCode.SUCCESS

    def to_json(self) -> str:
        """Serialize to a JSON string with status, message and data."""
        output: dict[str, Any] = {
            "status": "completed" if self.success else "failed",
            "message": self.message,
        }
        if not self.success:
            output["error"] = {"code": _code_name(self.exit_code)}
        output.update(self.data)
        return json.dumps(output, indent=2)


def _code_name(code: ExitCode | int) -> str:
    if isinstance(code, ExitCode):
        return code.name
    return "UNKNOWN_ERROR"


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
    details: dict[str, Any] | None = None,
) -> NoReturn:
    """Exit with a formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.
        details: Extra fields merged into the JSON error object.

    Note:
        This function never returns; it always calls sys.exit().
    """
    if json_output:
        error: dict[str, Any] = {"code": _code_name(code), "message": message}
        if details:
            error.update(details)
        click.echo(json.dumps({"status": "failed", "error": error}, indent=2))
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))
