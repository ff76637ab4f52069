"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (TRACKPLAN_*)
3. Config file (~/.trackplan/config.toml)
4. Default values

Environment variables:
- TRACKPLAN_FFMPEG_PATH: Path to ffmpeg executable
- TRACKPLAN_FFPROBE_PATH: Path to ffprobe executable
- TRACKPLAN_POLICY: Default policy file
- TRACKPLAN_WORKERS: Parallel files for batch processing
- TRACKPLAN_LOG_LEVEL: Log level
- TRACKPLAN_CONFIG_PATH: Path to config file (overrides default location)
- TRACKPLAN_DATA_DIR: Path to trackplan data directory (overrides ~/.trackplan/)
"""

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from trackplan.config.env import EnvOverrides
from trackplan.config.models import (
    LoggingConfig,
    ProcessingConfig,
    ToolPathsConfig,
    TrackplanConfig,
)
from trackplan.core.errors import TrackplanError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".trackplan"
CONFIG_FILE_NAME = "config.toml"


class ConfigError(TrackplanError):
    """Raised when configuration values are invalid."""

    pass


def get_data_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the trackplan data directory.

    Can be overridden by TRACKPLAN_DATA_DIR environment variable.

    Returns:
        Path to the data directory (~/.trackplan/ by default).
    """
    return EnvOverrides.from_env(env).data_dir or DEFAULT_CONFIG_DIR


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by TRACKPLAN_CONFIG_PATH environment variable;
    otherwise config.toml inside the data directory.
    """
    return (
        EnvOverrides.from_env(env).config_path
        or get_data_dir(env) / CONFIG_FILE_NAME
    )


def load_config_file(
    path: Path | None = None, env: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        env: Optional environment mapping used to locate the file.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist or
        cannot be parsed.
    """
    if path is None:
        path = get_default_config_path(env)

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return config


def _file_path(section: dict[str, Any], key: str) -> Path | None:
    value = section.get(key)
    return Path(value).expanduser() if value else None


def get_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: Path | None = None,
    ffprobe_path: Path | None = None,
    policy_path: Path | None = None,
    workers: int | None = None,
) -> TrackplanConfig:
    """Get trackplan configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides TRACKPLAN_CONFIG_PATH).
        env: Optional environment mapping instead of os.environ.
        ffmpeg_path: CLI override for ffmpeg path.
        ffprobe_path: CLI override for ffprobe path.
        policy_path: CLI override for the default policy.
        workers: CLI override for batch worker count.

    Returns:
        TrackplanConfig with merged configuration.

    Raises:
        ConfigError: If a merged value fails validation.
    """
    overrides = EnvOverrides.from_env(env)
    file_config = load_config_file(config_path, env)

    tools_file = file_config.get("tools", {})
    tools = ToolPathsConfig(
        ffmpeg=(
            ffmpeg_path
            or overrides.ffmpeg
            or _file_path(tools_file, "ffmpeg")
        ),
        ffprobe=(
            ffprobe_path
            or overrides.ffprobe
            or _file_path(tools_file, "ffprobe")
        ),
    )

    logging_file = file_config.get("logging", {})
    processing_file = file_config.get("processing", {})
    try:
        logging_config = LoggingConfig(
            level=overrides.log_level or logging_file.get("level", "info"),
            file=_file_path(logging_file, "file"),
            format=logging_file.get("format", "text"),
            include_stderr=logging_file.get("include_stderr", False),
            max_bytes=logging_file.get("max_bytes", 10_485_760),
            backup_count=logging_file.get("backup_count", 5),
        )
        processing = ProcessingConfig(
            policy=(
                policy_path
                or overrides.policy
                or _file_path(processing_file, "policy")
            ),
            workers=(
                workers
                or overrides.workers
                or processing_file.get("workers")
            ),
            ffmpeg_timeout=processing_file.get("ffmpeg_timeout", 3600),
            ffprobe_timeout=processing_file.get("ffprobe_timeout", 60),
            passthrough=processing_file.get("passthrough", "symlink"),
            keep_optional=processing_file.get("keep_optional", True),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return TrackplanConfig(tools=tools, logging=logging_config, processing=processing)
