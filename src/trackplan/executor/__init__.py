"""Plan executors.

- FFmpegPlanExecutor: remux/transcode with ffmpeg
- PassthroughExecutor: symlink or copy files that need no changes
"""

from trackplan.executor.ffmpeg import FFmpegPlanExecutor, build_ffmpeg_command
from trackplan.executor.interface import (
    ExecutionError,
    ExecutorResult,
    PlanExecutor,
    get_tool_path,
    output_path_for,
    require_tool,
)
from trackplan.executor.passthrough import PassthroughExecutor

__all__ = [
    "ExecutionError",
    "ExecutorResult",
    "FFmpegPlanExecutor",
    "PassthroughExecutor",
    "PlanExecutor",
    "build_ffmpeg_command",
    "get_tool_path",
    "output_path_for",
    "require_tool",
]
