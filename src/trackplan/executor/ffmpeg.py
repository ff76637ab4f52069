"""FFmpeg executor: remux and transcode according to a Plan.

Kept streams are mapped explicitly in input order; dropped streams are
left unmapped. Each output stream gets either ``copy`` or the encoder of
its target codec.
"""

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg execution
import tempfile
from pathlib import Path

from trackplan.executor.interface import (
    ExecutionError,
    ExecutorResult,
    output_path_for,
    require_tool,
)
from trackplan.policy.types import Plan

logger = logging.getLogger(__name__)

DEFAULT_FFMPEG_TIMEOUT = 3600


def build_ffmpeg_command(
    plan: Plan,
    source: Path,
    output: Path,
    ffmpeg_path: Path | str = "ffmpeg",
) -> list[str]:
    """Build the ffmpeg argument list for a plan.

    Args:
        plan: Plan to apply.
        source: Input file.
        output: Output file; ffmpeg picks the muxer from its suffix.
        ffmpeg_path: ffmpeg executable.

    Returns:
        Command line as a list of arguments.

    Raises:
        ExecutionError: If the plan keeps no streams or names a codec
            without a known encoder.
    """
    kept = plan.kept
    if not kept:
        raise ExecutionError(f"Plan for {source} keeps no streams")

    cmd = [str(ffmpeg_path), "-y", "-i", str(source)]
    for planned in kept:
        cmd.extend(["-map", f"0:{planned.index}"])

    for ordinal, planned in enumerate(kept):
        try:
            codec = planned.action.ffmpeg_codec
        except ValueError as e:
            raise ExecutionError(f"Stream {planned.stream.label}: {e}") from e
        cmd.extend([f"-c:{ordinal}", codec])

    cmd.append(str(output))
    return cmd


class FFmpegPlanExecutor:
    """Executor that writes plan output with ffmpeg.

    The executor:
    1. Writes to a temp file next to the destination
    2. Runs ffmpeg with explicit stream mapping
    3. Atomically moves the temp file to the destination
    """

    def __init__(
        self,
        ffmpeg_path: Path | None = None,
        timeout: int = DEFAULT_FFMPEG_TIMEOUT,
    ) -> None:
        self._tool_path = ffmpeg_path
        self._timeout = timeout

    @property
    def tool_path(self) -> Path:
        """Get path to ffmpeg, verifying availability."""
        if self._tool_path is None:
            self._tool_path = require_tool("ffmpeg")
        return self._tool_path

    def execute(self, plan: Plan, source: Path, destination: Path) -> ExecutorResult:
        """Run ffmpeg for the plan.

        Args:
            plan: Plan to apply.
            source: Input media file.
            destination: Output path (suffix replaced by the output format).

        Returns:
            ExecutorResult with success status.
        """
        output_path = output_path_for(plan, destination)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            prefix=".trackplan-",
            suffix=output_path.suffix,
            delete=False,
            dir=output_path.parent,
        ) as tmp:
            temp_path = Path(tmp.name)

        try:
            cmd = build_ffmpeg_command(plan, source, temp_path, self.tool_path)
        except ExecutionError as e:
            temp_path.unlink(missing_ok=True)
            return ExecutorResult(success=False, message=str(e))

        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(  # nosec B603 - cmd built from validated plan
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            temp_path.unlink(missing_ok=True)
            return ExecutorResult(
                success=False,
                message=f"ffmpeg timed out after {self._timeout}s",
            )
        except (subprocess.SubprocessError, OSError) as e:
            temp_path.unlink(missing_ok=True)
            return ExecutorResult(
                success=False,
                message=f"ffmpeg execution failed: {e}",
            )

        if result.returncode != 0:
            temp_path.unlink(missing_ok=True)
            stderr = result.stderr.strip().splitlines()
            detail = stderr[-1] if stderr else f"exit code {result.returncode}"
            return ExecutorResult(success=False, message=f"ffmpeg failed: {detail}")

        try:
            temp_path.replace(output_path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            return ExecutorResult(
                success=False,
                message=f"Failed to move output file: {e}",
            )

        logger.info("Wrote %s (%s)", output_path, plan.summary)
        return ExecutorResult(
            success=True,
            message=plan.summary,
            output_path=output_path,
        )
