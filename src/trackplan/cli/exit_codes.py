"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (policy, config)
    20-29: Target/file errors
    30-39: Tool and probe errors
    40-49: Operation errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for trackplan CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    POLICY_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/probe errors (30-39)
    TOOL_NOT_AVAILABLE = 30
    PROBE_FAILED = 32

    # Operation errors (40-49)
    PLANNING_FAILED = 40
    EXECUTION_FAILED = 41
