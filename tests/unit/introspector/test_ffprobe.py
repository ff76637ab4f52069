"""Unit tests for FFprobeIntrospector with subprocess patched out."""

import json
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from trackplan.core.errors import ToolNotAvailableError
from trackplan.introspector import FFprobeIntrospector, ProbeFailedError


def make_completed(stdout: str) -> MagicMock:
    """Create a fake CompletedProcess with the given stdout."""
    completed = MagicMock()
    completed.stdout = stdout
    completed.returncode = 0
    return completed


@pytest.fixture
def media_file(temp_dir: Path) -> Path:
    path = temp_dir / "movie.mkv"
    path.write_bytes(b"not really matroska")
    return path


@pytest.fixture
def introspector() -> FFprobeIntrospector:
    return FFprobeIntrospector(ffprobe_path=Path("/usr/bin/ffprobe"), timeout=5)


class TestFFprobeIntrospector:
    """Tests for FFprobeIntrospector.get_file_info."""

    def test_parses_ffprobe_json(
        self, introspector, media_file, ffprobe_fixture
    ) -> None:
        payload = json.dumps(ffprobe_fixture("movie_multi_audio"))

        with patch("subprocess.run", return_value=make_completed(payload)) as run:
            result = introspector.get_file_info(media_file)

        assert result.file_path == media_file
        assert len(result.streams) == 5
        args, kwargs = run.call_args
        assert args[0][0] == "/usr/bin/ffprobe"
        assert args[0][-1] == str(media_file)
        assert "-show_streams" in args[0]
        assert kwargs["timeout"] == 5
        assert kwargs["check"] is True

    def test_missing_file(self, introspector, temp_dir) -> None:
        with pytest.raises(ProbeFailedError, match="File not found"):
            introspector.get_file_info(temp_dir / "missing.mkv")

    def test_timeout(self, introspector, media_file) -> None:
        error = subprocess.TimeoutExpired(cmd="ffprobe", timeout=5)

        with patch("subprocess.run", side_effect=error):
            with pytest.raises(ProbeFailedError, match="timed out"):
                introspector.get_file_info(media_file)

    def test_nonzero_exit(self, introspector, media_file) -> None:
        error = subprocess.CalledProcessError(
            1, "ffprobe", stderr="Invalid data found when processing input"
        )

        with patch("subprocess.run", side_effect=error):
            with pytest.raises(ProbeFailedError, match="Invalid data found"):
                introspector.get_file_info(media_file)

    def test_invalid_json(self, introspector, media_file) -> None:
        with patch("subprocess.run", return_value=make_completed("not json")):
            with pytest.raises(ProbeFailedError, match="Invalid ffprobe output"):
                introspector.get_file_info(media_file)

    def test_missing_streams_key(self, introspector, media_file) -> None:
        payload = json.dumps({"format": {"format_name": "matroska"}})

        with patch("subprocess.run", return_value=make_completed(payload)):
            with pytest.raises(ProbeFailedError, match="Missing 'streams'"):
                introspector.get_file_info(media_file)

    def test_tool_lookup_when_no_path_given(self) -> None:
        with patch(
            "trackplan.executor.interface.require_tool",
            side_effect=ToolNotAvailableError("ffprobe"),
        ):
            with pytest.raises(ToolNotAvailableError):
                FFprobeIntrospector()
