"""TRACKPLAN_* environment overrides.

The environment sits between CLI flags and the config file in precedence.
All variables are read once into an EnvOverrides value; tests pass a plain
mapping instead of touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "TRACKPLAN_"


def _as_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def _existing_tool(name: str, value: str | None) -> Path | None:
    """Tool override; ignored with a warning if the file is missing."""
    path = _as_path(value)
    if path is not None and not path.exists():
        logger.warning("%s%s points to a missing file: %s", ENV_PREFIX, name, value)
        return None
    return path


def _as_workers(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring %sWORKERS=%r: not an integer", ENV_PREFIX, value)
        return None


@dataclass(frozen=True)
class EnvOverrides:
    """Settings taken from TRACKPLAN_* variables. Unset or empty is None."""

    data_dir: Path | None = None
    config_path: Path | None = None
    ffmpeg: Path | None = None
    ffprobe: Path | None = None
    policy: Path | None = None
    workers: int | None = None
    log_level: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> EnvOverrides:
        """Read overrides from ``env`` (default: os.environ)."""
        source = os.environ if env is None else env

        def read(name: str) -> str | None:
            return source.get(ENV_PREFIX + name, "").strip() or None

        return cls(
            data_dir=_as_path(read("DATA_DIR")),
            config_path=_as_path(read("CONFIG_PATH")),
            ffmpeg=_existing_tool("FFMPEG_PATH", read("FFMPEG_PATH")),
            ffprobe=_existing_tool("FFPROBE_PATH", read("FFPROBE_PATH")),
            policy=_as_path(read("POLICY")),
            workers=_as_workers(read("WORKERS")),
            log_level=read("LOG_LEVEL"),
        )
