"""Policy file loading and validation.

This module provides functions to load YAML or TOML policy files and
validate them using Pydantic models.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml

from trackplan.domain import StreamType
from trackplan.policy.exceptions import PolicyValidationError
from trackplan.policy.pydantic_models import PolicyModel, RequirementModel
from trackplan.policy.types import (
    CapabilitySet,
    PolicySchema,
    Requirement,
    RequirementOrder,
)

logger = logging.getLogger(__name__)

TOML_SUFFIXES = frozenset({".toml"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def load_policy(policy_path: Path) -> PolicySchema:
    """Load and validate a policy from a YAML or TOML file.

    The format is chosen by file suffix; unknown suffixes are read as YAML.

    Args:
        policy_path: Path to the policy file.

    Returns:
        Validated PolicySchema.

    Raises:
        PolicyValidationError: If the policy file is invalid.
        FileNotFoundError: If the policy file does not exist.
    """
    if not policy_path.exists():
        raise FileNotFoundError(f"Policy file not found: {policy_path}")

    if policy_path.suffix.lower() in TOML_SUFFIXES:
        try:
            with open(policy_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise PolicyValidationError(f"Invalid TOML syntax: {e}") from e
    else:
        try:
            with open(policy_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PolicyValidationError(f"Invalid YAML syntax: {e}") from e

    if not data:
        raise PolicyValidationError("Policy file is empty")

    if not isinstance(data, dict):
        raise PolicyValidationError("Policy file must be a mapping")

    logger.debug("Loaded policy file %s", policy_path)
    return load_policy_from_dict(data)


def load_policy_from_dict(data: dict[str, Any]) -> PolicySchema:
    """Load and validate a policy from a dictionary.

    Args:
        data: Dictionary containing policy configuration.

    Returns:
        Validated PolicySchema.

    Raises:
        PolicyValidationError: If the policy data is invalid.
    """
    try:
        model = PolicyModel.model_validate(data)
    except Exception as e:
        # Transform Pydantic errors to user-friendly messages
        error_msg = _format_validation_error(e)
        raise PolicyValidationError(error_msg) from e

    try:
        return _convert_to_policy_schema(model)
    except ValueError as e:
        raise PolicyValidationError(f"Policy validation failed: {e}") from e


def _convert_requirement(model: RequirementModel) -> Requirement:
    return Requirement(
        stream_type=StreamType.parse(model.type),
        language=model.language,
        level=model.level,
        allow_empty=model.allow_empty,
    )


def _convert_to_policy_schema(model: PolicyModel) -> PolicySchema:
    """Convert a validated PolicyModel to the engine's PolicySchema."""
    capabilities = CapabilitySet(
        supported_formats=tuple(model.supported_formats),
        supported_codecs=tuple(model.supported_codecs),
    )
    return PolicySchema(
        capabilities=capabilities,
        requirements=tuple(_convert_requirement(r) for r in model.requirements),
        output_format=model.output_format,
        requirement_order=RequirementOrder(model.requirement_order),
    )


def _format_validation_error(error: Exception) -> str:
    """Format a Pydantic validation error into a user-friendly message."""
    from pydantic import ValidationError

    if isinstance(error, ValidationError):
        # Get the first error
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", str(error))
            if loc:
                return f"Policy validation failed: {loc}: {msg}"
            return f"Policy validation failed: {msg}"

    return f"Policy validation failed: {error}"
