"""Shared test fixtures for trackplan."""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from trackplan.config import TrackplanConfig
from trackplan.domain import StreamType
from trackplan.policy.types import (
    CapabilitySet,
    PolicySchema,
    Requirement,
    SatisfactionLevel,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Capability set and requirements of the reference transcoder configuration
REFERENCE_FORMATS = ("mkv",)
REFERENCE_CODECS = ("HEVC", "H261", "H264", "VC1", "MPEG1VIDEO", "MPEG2VIDEO", "AAC")


@pytest.fixture
def reference_requirements() -> tuple[Requirement, ...]:
    """[Video/All, Audio(rus)/All, Audio(eng)/AtLeastOne, Audio(*)/WithOther]."""
    return (
        Requirement(StreamType.VIDEO, level=SatisfactionLevel.ALL),
        Requirement(StreamType.AUDIO, "rus", SatisfactionLevel.ALL),
        Requirement(StreamType.AUDIO, "eng", SatisfactionLevel.AT_LEAST_ONE),
        Requirement(StreamType.AUDIO, level=SatisfactionLevel.WITH_OTHER),
    )


def load_ffprobe_fixture(name: str) -> dict:
    """Load an ffprobe JSON fixture by name (without .json extension)."""
    fixture_path = FIXTURES_DIR / "ffprobe" / f"{name}.json"
    return json.loads(fixture_path.read_text())


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def policies_dir() -> Path:
    """Return the path to the policy fixtures directory."""
    return FIXTURES_DIR / "policies"


@pytest.fixture
def ffprobe_fixture():
    """Return the ffprobe fixture loader."""
    return load_ffprobe_fixture


@pytest.fixture
def reference_capabilities() -> CapabilitySet:
    """Capability set {mkv} / {HEVC, H261, H264, VC1, MPEG1VIDEO, MPEG2VIDEO, AAC}."""
    return CapabilitySet(
        supported_formats=REFERENCE_FORMATS,
        supported_codecs=REFERENCE_CODECS,
    )


@pytest.fixture
def reference_policy(
    reference_capabilities: CapabilitySet,
    reference_requirements: tuple[Requirement, ...],
) -> PolicySchema:
    """Reference capabilities plus the four reference requirements."""
    return PolicySchema(
        capabilities=reference_capabilities,
        requirements=reference_requirements,
    )


@pytest.fixture
def default_config() -> TrackplanConfig:
    """Configuration with all defaults, independent of the environment."""
    return TrackplanConfig()


@pytest.fixture
def temp_media_tree(temp_dir: Path) -> Path:
    """Create a source tree with media, non-media and hidden files."""
    source = temp_dir / "source"
    (source / "season1").mkdir(parents=True)
    (source / ".hidden").mkdir()
    (source / "movie.mkv").write_bytes(b"mkv")
    (source / "season1" / "episode.mp4").write_bytes(b"mp4")
    (source / "season1" / "notes.txt").write_text("not media")
    (source / ".hidden" / "secret.mkv").write_bytes(b"mkv")
    return source
