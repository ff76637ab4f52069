"""Unit tests for configuration loading and precedence."""

from pathlib import Path

import pytest

from trackplan.config import (
    ConfigError,
    EnvOverrides,
    LoggingConfig,
    ProcessingConfig,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)

CONFIG_TOML = """\
[tools]
ffmpeg = "/opt/ffmpeg/bin/ffmpeg"

[logging]
level = "warning"
format = "json"

[processing]
policy = "/etc/trackplan/policy.yaml"
workers = 3
passthrough = "copy"
keep_optional = false
"""


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    path = temp_dir / "config.toml"
    path.write_text(CONFIG_TOML)
    return path


class TestEnvOverrides:
    """Tests for reading TRACKPLAN_* variables."""

    def test_unset_and_empty(self) -> None:
        overrides = EnvOverrides.from_env({"TRACKPLAN_POLICY": "  "})

        assert overrides == EnvOverrides()

    def test_reads_values(self, temp_dir: Path) -> None:
        overrides = EnvOverrides.from_env(
            {
                "TRACKPLAN_FFPROBE_PATH": str(temp_dir),
                "TRACKPLAN_POLICY": "/srv/policy.yaml",
                "TRACKPLAN_WORKERS": "4",
                "TRACKPLAN_LOG_LEVEL": "debug",
            }
        )

        assert overrides.ffprobe == temp_dir
        assert overrides.policy == Path("/srv/policy.yaml")
        assert overrides.workers == 4
        assert overrides.log_level == "debug"

    def test_invalid_workers_ignored(self, caplog) -> None:
        overrides = EnvOverrides.from_env({"TRACKPLAN_WORKERS": "four"})

        assert overrides.workers is None
        assert "TRACKPLAN_WORKERS" in caplog.text

    def test_missing_tool_ignored(self, temp_dir: Path, caplog) -> None:
        missing = temp_dir / "ffmpeg"

        overrides = EnvOverrides.from_env({"TRACKPLAN_FFMPEG_PATH": str(missing)})

        assert overrides.ffmpeg is None
        assert "points to a missing file" in caplog.text

    def test_policy_need_not_exist(self) -> None:
        overrides = EnvOverrides.from_env({"TRACKPLAN_POLICY": "/nowhere.yaml"})

        assert overrides.policy == Path("/nowhere.yaml")


class TestConfigPaths:
    """Tests for data directory and config file resolution."""

    def test_data_dir_override(self, temp_dir: Path) -> None:
        assert get_data_dir({"TRACKPLAN_DATA_DIR": str(temp_dir)}) == temp_dir

    def test_config_path_inside_data_dir(self, temp_dir: Path) -> None:
        env = {"TRACKPLAN_DATA_DIR": str(temp_dir)}

        assert get_default_config_path(env) == temp_dir / "config.toml"

    def test_config_path_override(self, temp_dir: Path) -> None:
        env = {
            "TRACKPLAN_DATA_DIR": str(temp_dir),
            "TRACKPLAN_CONFIG_PATH": str(temp_dir / "other.toml"),
        }

        assert get_default_config_path(env) == temp_dir / "other.toml"

    def test_missing_file_is_empty(self, temp_dir: Path) -> None:
        assert load_config_file(temp_dir / "missing.toml") == {}

    def test_invalid_toml_is_ignored(self, temp_dir: Path, caplog) -> None:
        path = temp_dir / "config.toml"
        path.write_text("[tools\n")

        assert load_config_file(path) == {}
        assert "Failed to load config file" in caplog.text


class TestGetConfig:
    """Tests for get_config precedence: CLI > env > file > defaults."""

    def test_defaults(self, temp_dir: Path) -> None:
        config = get_config(config_path=temp_dir / "missing.toml", env={})

        assert config.tools.ffmpeg is None
        assert config.logging.level == "info"
        assert config.processing.policy is None
        assert config.processing.workers is None
        assert config.processing.passthrough == "symlink"
        assert config.processing.keep_optional is True

    def test_file_values(self, config_file: Path) -> None:
        config = get_config(config_path=config_file, env={})

        assert config.tools.ffmpeg == Path("/opt/ffmpeg/bin/ffmpeg")
        assert config.get_tool_path("ffmpeg") == Path("/opt/ffmpeg/bin/ffmpeg")
        assert config.get_tool_path("ffprobe") is None
        assert config.logging.level == "warning"
        assert config.logging.format == "json"
        assert config.processing.policy == Path("/etc/trackplan/policy.yaml")
        assert config.processing.workers == 3
        assert config.processing.passthrough == "copy"
        assert config.processing.keep_optional is False

    def test_env_overrides_file(self, config_file: Path, temp_dir: Path) -> None:
        env = {
            "TRACKPLAN_FFMPEG_PATH": str(temp_dir),
            "TRACKPLAN_LOG_LEVEL": "debug",
            "TRACKPLAN_POLICY": "/srv/policy.toml",
            "TRACKPLAN_WORKERS": "2",
        }

        config = get_config(config_path=config_file, env=env)

        assert config.tools.ffmpeg == temp_dir
        assert config.logging.level == "debug"
        assert config.processing.policy == Path("/srv/policy.toml")
        assert config.processing.workers == 2

    def test_cli_overrides_env(self, config_file: Path) -> None:
        env = {"TRACKPLAN_WORKERS": "2", "TRACKPLAN_POLICY": "/srv/policy.toml"}

        config = get_config(
            config_path=config_file,
            env=env,
            policy_path=Path("cli.yaml"),
            workers=1,
        )

        assert config.processing.policy == Path("cli.yaml")
        assert config.processing.workers == 1

    def test_invalid_file_value(self, temp_dir: Path) -> None:
        path = temp_dir / "config.toml"
        path.write_text('[processing]\npassthrough = "hardlink"\n')

        with pytest.raises(ConfigError, match="passthrough"):
            get_config(config_path=path, env={})


class TestConfigModels:
    """Tests for config model validation and logging overrides."""

    def test_logging_level_validated(self) -> None:
        with pytest.raises(ValueError, match="level"):
            LoggingConfig(level="verbose")

    def test_workers_validated(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            ProcessingConfig(workers=0)

    def test_logging_overrides(self) -> None:
        base = LoggingConfig(level="warning", max_bytes=1024)

        merged = base.with_overrides(level="debug", format="json")

        assert merged.level == "debug"
        assert merged.format == "json"
        assert merged.file is None
        assert merged.max_bytes == 1024

    def test_logging_overrides_keep_base(self) -> None:
        base = LoggingConfig(level="error", include_stderr=True)

        merged = base.with_overrides()

        assert merged.level == "error"
        assert merged.include_stderr is True

    def test_invalid_logging_override(self) -> None:
        with pytest.raises(ValueError, match="format"):
            LoggingConfig().with_overrides(format="xml")
