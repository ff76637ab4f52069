"""Configuration models for trackplan.

This module defines dataclasses for configuration settings including
tool paths, logging and batch processing behavior.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})
VALID_PASSTHROUGH_MODES = frozenset({"symlink", "copy"})


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )

    def with_overrides(
        self,
        level: str | None = None,
        file: Path | None = None,
        format: str | None = None,
    ) -> "LoggingConfig":
        """Copy with the given CLI overrides applied; None keeps a value.

        Raises:
            ValueError: If an override fails validation.
        """
        changes = {"level": level, "file": file, "format": format}
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass
class ProcessingConfig:
    """Configuration for planning and batch processing."""

    # Default policy file used when --policy is not given
    policy: Path | None = None

    # Parallel files for `process` (None = half the CPU cores)
    workers: int | None = None

    # Seconds before an ffmpeg run is abandoned
    ffmpeg_timeout: int = 3600

    # Seconds before an ffprobe run is abandoned
    ffprobe_timeout: int = 60

    # How passthrough plans reach the destination: symlink or copy
    passthrough: str = "symlink"

    # Keep optional-keep streams (False drops them)
    keep_optional: bool = True

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.ffmpeg_timeout <= 0:
            raise ValueError(
                f"ffmpeg_timeout must be positive, got {self.ffmpeg_timeout}"
            )
        if self.ffprobe_timeout <= 0:
            raise ValueError(
                f"ffprobe_timeout must be positive, got {self.ffprobe_timeout}"
            )
        if self.passthrough not in VALID_PASSTHROUGH_MODES:
            raise ValueError(
                f"passthrough must be one of {sorted(VALID_PASSTHROUGH_MODES)}, "
                f"got {self.passthrough}"
            )


@dataclass
class TrackplanConfig:
    """Main configuration container for trackplan.

    Aggregates all configuration sections.
    """

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)

    def get_tool_path(self, tool_name: str) -> Path | None:
        """Get configured path for a tool.

        Args:
            tool_name: Name of the tool (ffmpeg, ffprobe).

        Returns:
            Configured path or None if not configured.
        """
        return getattr(self.tools, tool_name, None)
