"""Configuration management for trackplan.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (TRACKPLAN_*)
3. Config file (~/.trackplan/config.toml)
4. Default values (lowest priority)
"""

from trackplan.config.env import EnvOverrides
from trackplan.config.loader import (
    ConfigError,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from trackplan.config.models import (
    LoggingConfig,
    ProcessingConfig,
    ToolPathsConfig,
    TrackplanConfig,
)

__all__ = [
    # Models
    "LoggingConfig",
    "ProcessingConfig",
    "ToolPathsConfig",
    "TrackplanConfig",
    # Loader
    "ConfigError",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    # Helpers
    "EnvOverrides",
]
