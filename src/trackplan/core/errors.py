"""Base exception hierarchy for trackplan."""


class TrackplanError(Exception):
    """Base class for all trackplan errors."""

    pass


class ToolNotAvailableError(TrackplanError):
    """Raised when a required external tool (ffmpeg, ffprobe) is missing."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(
            f"{tool_name} is not installed or not in PATH. "
            f"Install ffmpeg or configure the path via "
            f"TRACKPLAN_{tool_name.upper()}_PATH or ~/.trackplan/config.toml"
        )
