"""FFprobe-based implementation of MediaIntrospector protocol."""

import json
import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from trackplan.domain import ProbeResult
from trackplan.introspector.interface import ProbeFailedError
from trackplan.introspector.parsers import parse_ffprobe_output

logger = logging.getLogger(__name__)

DEFAULT_FFPROBE_TIMEOUT = 60


class FFprobeIntrospector:
    """ffprobe-based implementation of MediaIntrospector protocol.

    Lists the streams of a media file using ffprobe. Supports configured
    ffprobe paths via the trackplan configuration system.
    """

    def __init__(
        self,
        ffprobe_path: Path | None = None,
        timeout: int = DEFAULT_FFPROBE_TIMEOUT,
    ) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Optional explicit path to ffprobe. If not provided,
                uses the path from trackplan configuration or system PATH.
            timeout: Seconds before an ffprobe run is abandoned.

        Raises:
            ToolNotAvailableError: If ffprobe is not available.
        """
        if ffprobe_path is None:
            from trackplan.executor.interface import require_tool

            ffprobe_path = require_tool("ffprobe")
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    def get_file_info(self, path: Path) -> ProbeResult:
        """Extract the stream catalog of a media file.

        Args:
            path: Path to the media file.

        Returns:
            ProbeResult with container format and streams.

        Raises:
            ProbeFailedError: If the file cannot be probed.
        """
        if not path.exists():
            raise ProbeFailedError(f"File not found: {path}")

        try:
            ffprobe_output = self._run_ffprobe(path)
        except subprocess.TimeoutExpired as e:
            raise ProbeFailedError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except subprocess.CalledProcessError as e:
            raise ProbeFailedError(f"ffprobe failed for {path}: {e.stderr or e}") from e
        except json.JSONDecodeError as e:
            raise ProbeFailedError(f"Invalid ffprobe output for {path}: {e}") from e

        result = parse_ffprobe_output(path, ffprobe_output)
        logger.debug("Probed %s: %d streams", path, len(result.streams))
        return result

    def _run_ffprobe(self, path: Path) -> dict:
        """Run ffprobe and return parsed JSON output.

        Raises:
            subprocess.CalledProcessError: If ffprobe returns non-zero.
            subprocess.TimeoutExpired: If ffprobe exceeds the timeout.
            json.JSONDecodeError: If output is not valid JSON.
            ProbeFailedError: If output is missing required keys.
        """
        result = subprocess.run(  # nosec B603 - ffprobe path is validated
            [
                str(self._ffprobe_path),
                "-v",
                "error",
                "-print_format",
                "json",
                "-show_streams",
                "-show_format",
                str(path),
            ],
            capture_output=True,
            text=True,
            errors="replace",
            check=True,
            timeout=self._timeout,
        )
        data = json.loads(result.stdout)

        if not isinstance(data, dict) or "streams" not in data:
            raise ProbeFailedError(
                f"Missing 'streams' in ffprobe output for {path}. "
                "File may be corrupted or not a valid media file."
            )

        return data
