"""Unit tests for the per-file workflow."""

from pathlib import Path

import pytest

from trackplan.domain import MediaStream, StreamType
from trackplan.executor import ExecutorResult, PassthroughExecutor
from trackplan.introspector import StubIntrospector
from trackplan.policy.evaluator import PlanningError
from trackplan.policy.types import (
    PolicySchema,
    Requirement,
    SatisfactionLevel,
)
from trackplan.workflow import FileProcessor, FileStatus, collect_jobs


class RecordingExecutor:
    """Executor that records calls instead of running ffmpeg."""

    def __init__(self, success: bool = True, message: str = "written") -> None:
        self.success = success
        self.message = message
        self.calls: list[tuple[Path, Path]] = []

    def execute(self, plan, source: Path, destination: Path) -> ExecutorResult:
        self.calls.append((source, destination))
        output = destination.with_suffix(f".{plan.output_format}")
        return ExecutorResult(
            success=self.success,
            message=self.message,
            output_path=output if self.success else None,
        )


def make_stream(
    index: int, stream_type: StreamType, codec: str, language: str | None = None
) -> MediaStream:
    return MediaStream(index, stream_type, codec, language)


@pytest.fixture
def policy(reference_capabilities) -> PolicySchema:
    """Video, at least one English track, other audio optional."""
    return PolicySchema(
        capabilities=reference_capabilities,
        requirements=(
            Requirement(StreamType.VIDEO, level=SatisfactionLevel.ALL),
            Requirement(StreamType.AUDIO, "eng", SatisfactionLevel.AT_LEAST_ONE),
            Requirement(StreamType.AUDIO, level=SatisfactionLevel.WITH_OTHER),
        ),
    )


# Video + English AAC: satisfies the policy unchanged
CLEAN = [
    make_stream(0, StreamType.VIDEO, "hevc"),
    make_stream(1, StreamType.AUDIO, "aac", "eng"),
]

# English AC3 needs transcoding to AAC
NEEDS_TRANSCODE = [
    make_stream(0, StreamType.VIDEO, "h264"),
    make_stream(1, StreamType.AUDIO, "ac3", "eng"),
]

# No English audio at all
UNSATISFIABLE = [
    make_stream(0, StreamType.VIDEO, "hevc"),
    make_stream(1, StreamType.AUDIO, "aac", "ger"),
]


class TestCollectJobs:
    """Tests for collect_jobs source tree mirroring."""

    def test_mirrors_media_files(self, temp_media_tree: Path, temp_dir: Path) -> None:
        destination = temp_dir / "dest"

        jobs = collect_jobs(temp_media_tree, destination)

        assert jobs == [
            (temp_media_tree / "movie.mkv", destination / "movie.mkv"),
            (
                temp_media_tree / "season1" / "episode.mp4",
                destination / "season1" / "episode.mp4",
            ),
        ]

    def test_single_file_to_file(self, temp_media_tree: Path, temp_dir: Path) -> None:
        source = temp_media_tree / "movie.mkv"

        jobs = collect_jobs(source, temp_dir / "out.mkv")

        assert jobs == [(source, temp_dir / "out.mkv")]

    def test_single_file_into_directory(
        self, temp_media_tree: Path, temp_dir: Path
    ) -> None:
        source = temp_media_tree / "movie.mkv"
        destination = temp_dir / "dest"
        destination.mkdir()

        jobs = collect_jobs(source, destination)

        assert jobs == [(source, destination / "movie.mkv")]

    def test_missing_source(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            collect_jobs(temp_dir / "missing", temp_dir / "dest")


class TestFileProcessor:
    """Tests for FileProcessor.process_file."""

    @pytest.fixture
    def introspector(self) -> StubIntrospector:
        return StubIntrospector(
            {
                "clean.mkv": CLEAN,
                "transcode.mkv": NEEDS_TRANSCODE,
                "unsatisfiable.mkv": UNSATISFIABLE,
            }
        )

    def test_dry_run_only_plans(self, policy, introspector) -> None:
        executor = RecordingExecutor()
        processor = FileProcessor(policy, introspector, executor)

        result = processor.process_file(
            Path("transcode.mkv"), Path("/out/transcode.mkv"), dry_run=True
        )

        assert result.status == FileStatus.PLANNED
        assert result.success
        assert result.plan is not None
        assert result.plan.requires_transcode
        assert result.destination == Path("/out/transcode.mkv")
        assert executor.calls == []

    def test_transcode_goes_to_executor(self, policy, introspector) -> None:
        executor = RecordingExecutor()
        passthrough = PassthroughExecutor()
        processor = FileProcessor(
            policy, introspector, executor, passthrough=passthrough
        )

        result = processor.process_file(
            Path("transcode.mkv"), Path("/out/transcode.mkv")
        )

        assert result.status == FileStatus.TRANSCODED
        assert result.message == "written"
        assert executor.calls == [(Path("transcode.mkv"), Path("/out/transcode.mkv"))]

    def test_passthrough_plan_is_linked(
        self, policy, introspector, temp_dir
    ) -> None:
        source = temp_dir / "clean.mkv"
        source.write_bytes(b"mkv")
        destination = temp_dir / "out" / "clean.mkv"
        executor = RecordingExecutor()
        processor = FileProcessor(
            policy,
            introspector,
            executor,
            passthrough=PassthroughExecutor(),
        )

        result = processor.process_file(source, destination)

        assert result.status == FileStatus.LINKED
        assert result.destination == destination
        assert destination.is_symlink()
        assert executor.calls == []

    def test_passthrough_plan_without_passthrough_executor(
        self, policy, introspector
    ) -> None:
        executor = RecordingExecutor()
        processor = FileProcessor(policy, introspector, executor)

        result = processor.process_file(Path("clean.mkv"), Path("/out/clean.mkv"))

        assert result.status == FileStatus.TRANSCODED
        assert len(executor.calls) == 1

    def test_planning_failure(self, policy, introspector) -> None:
        executor = RecordingExecutor()
        processor = FileProcessor(policy, introspector, executor)

        result = processor.process_file(
            Path("unsatisfiable.mkv"), Path("/out/unsatisfiable.mkv")
        )

        assert result.status == FileStatus.FAILED
        assert isinstance(result.error, PlanningError)
        assert result.plan is None
        assert executor.calls == []
        assert "failures" in result.to_dict()["error"]

    def test_probe_failure(self, policy, introspector) -> None:
        processor = FileProcessor(policy, introspector, RecordingExecutor())

        result = processor.process_file(Path("unknown.mkv"), Path("/out/unknown.mkv"))

        assert result.status == FileStatus.FAILED
        assert "No catalog registered" in result.message
        assert result.to_dict()["error"] == {"message": result.message}

    def test_executor_failure(self, policy, introspector) -> None:
        executor = RecordingExecutor(success=False, message="ffmpeg failed: boom")
        processor = FileProcessor(policy, introspector, executor)

        result = processor.process_file(
            Path("transcode.mkv"), Path("/out/transcode.mkv")
        )

        assert result.status == FileStatus.FAILED
        assert result.error is None
        assert result.plan is not None
        assert result.message == "ffmpeg failed: boom"

    def test_probe_warnings_are_logged(self, policy, caplog) -> None:
        class WarningIntrospector(StubIntrospector):
            def get_file_info(self, path):
                result = super().get_file_info(path)
                return type(result)(
                    result.file_path,
                    result.container_format,
                    result.streams,
                    ("Duplicate stream index 1, skipping",),
                )

        processor = FileProcessor(
            policy,
            WarningIntrospector(default_streams=CLEAN),
            RecordingExecutor(),
        )

        processor.plan_file(Path("movie.mkv"))

        assert "movie.mkv: Duplicate stream index 1, skipping" in caplog.text

    def test_to_dict_includes_plan(self, policy, introspector) -> None:
        processor = FileProcessor(policy, introspector, RecordingExecutor())

        result = processor.process_file(
            Path("clean.mkv"), Path("/out/clean.mkv"), dry_run=True
        )
        data = result.to_dict()

        assert data["status"] == "planned"
        assert data["plan"]["requires_remux"] is False
        assert "error" not in data
