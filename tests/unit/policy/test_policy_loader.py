"""Unit tests for policy file loading and validation."""

from pathlib import Path

import pytest

from trackplan.domain import StreamType
from trackplan.policy import PolicyValidationError, load_policy, load_policy_from_dict
from trackplan.policy.types import RequirementOrder, SatisfactionLevel


def minimal_policy(**overrides) -> dict:
    """Return a minimal valid policy dict with overrides applied."""
    data = {
        "supported_formats": ["mkv"],
        "supported_codecs": ["hevc", "aac"],
    }
    data.update(overrides)
    return data


class TestLoadPolicyFiles:
    """Tests for load_policy with YAML and TOML files."""

    def test_loads_yaml_reference_policy(self, policies_dir: Path) -> None:
        policy = load_policy(policies_dir / "reference.yaml")

        assert policy.capabilities.supported_formats == ("mkv",)
        assert policy.capabilities.supported_codecs[0] == "HEVC"
        assert len(policy.requirements) == 4
        assert policy.requirements[1].language == "rus"
        assert policy.requirements[2].level == SatisfactionLevel.AT_LEAST_ONE
        assert policy.requirements[3].language is None

    def test_toml_legacy_layout_matches_yaml(self, policies_dir: Path) -> None:
        """The what/level TOML layout loads to the same policy as the YAML."""
        from_toml = load_policy(policies_dir / "reference.toml")
        from_yaml = load_policy(policies_dir / "reference.yaml")

        assert from_toml == from_yaml

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_policy(temp_dir / "missing.yaml")

    def test_empty_file(self, temp_dir: Path) -> None:
        path = temp_dir / "empty.yaml"
        path.write_text("")

        with pytest.raises(PolicyValidationError, match="empty"):
            load_policy(path)

    def test_non_mapping_file(self, temp_dir: Path) -> None:
        path = temp_dir / "list.yaml"
        path.write_text("- mkv\n- mp4\n")

        with pytest.raises(PolicyValidationError, match="mapping"):
            load_policy(path)

    def test_invalid_yaml_syntax(self, temp_dir: Path) -> None:
        path = temp_dir / "broken.yaml"
        path.write_text("supported_formats: [mkv\n")

        with pytest.raises(PolicyValidationError, match="Invalid YAML"):
            load_policy(path)

    def test_invalid_toml_syntax(self, temp_dir: Path) -> None:
        path = temp_dir / "broken.toml"
        path.write_text("supported-formats = [\n")

        with pytest.raises(PolicyValidationError, match="Invalid TOML"):
            load_policy(path)

    def test_invalid_level_reports_location(self, policies_dir: Path) -> None:
        with pytest.raises(PolicyValidationError) as exc_info:
            load_policy(policies_dir / "invalid_level.yaml")

        message = str(exc_info.value)
        assert message.startswith("Policy validation failed: requirements.0.level")
        assert "most" in message


class TestLoadPolicyFromDict:
    """Tests for load_policy_from_dict validation rules."""

    def test_defaults(self) -> None:
        policy = load_policy_from_dict(minimal_policy())

        assert policy.requirements == ()
        assert policy.output_format is None
        assert policy.requirement_order == RequirementOrder.DECLARED

    def test_requirement_default_levels(self) -> None:
        policy = load_policy_from_dict(
            minimal_policy(
                requirements=[{"type": "Audio"}, {"type": "audio", "language": "en"}]
            )
        )

        assert policy.requirements[0].level == SatisfactionLevel.WITH_OTHER
        assert policy.requirements[1].level == SatisfactionLevel.ALL
        assert policy.requirements[1].language == "eng"

    def test_hyphenated_keys_and_required_alias(self) -> None:
        policy = load_policy_from_dict(
            {
                "supported-formats": ["mkv"],
                "supported-codecs": ["aac"],
                "requirement-order": "Specificity",
                "required": [{"type": "subtitle", "allow-empty": True}],
            }
        )

        assert policy.requirement_order == RequirementOrder.SPECIFICITY
        assert policy.requirements[0].stream_type == StreamType.SUBTITLE
        assert policy.requirements[0].allow_empty is True

    def test_what_form(self) -> None:
        policy = load_policy_from_dict(
            minimal_policy(
                requirements=[
                    {"what": "Video", "level": "All"},
                    {"what": {"Audio": {"language": "rus"}}, "level": "AtLeastOne"},
                ]
            )
        )

        assert policy.requirements[0].stream_type == StreamType.VIDEO
        assert policy.requirements[1].language == "rus"
        assert policy.requirements[1].level == SatisfactionLevel.AT_LEAST_ONE

    def test_what_form_with_other_keys(self) -> None:
        """Keys next to ``what`` survive and ``what`` itself is consumed."""
        policy = load_policy_from_dict(
            minimal_policy(
                required=[
                    {"what": {"Subtitle": None}, "level": "All", "allow-empty": True}
                ]
            )
        )

        requirement = policy.requirements[0]
        assert requirement.stream_type == StreamType.SUBTITLE
        assert requirement.language is None
        assert requirement.level == SatisfactionLevel.ALL
        assert requirement.allow_empty is True

    def test_what_and_type_conflict(self) -> None:
        with pytest.raises(PolicyValidationError, match="not both"):
            load_policy_from_dict(
                minimal_policy(requirements=[{"what": "Video", "type": "video"}])
            )

    def test_required_and_requirements_conflict(self) -> None:
        with pytest.raises(PolicyValidationError, match="not both"):
            load_policy_from_dict(minimal_policy(required=[], requirements=[]))

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(PolicyValidationError, match="unexpected_key"):
            load_policy_from_dict(minimal_policy(unexpected_key=True))

    def test_unselectable_type_rejected(self) -> None:
        with pytest.raises(PolicyValidationError, match="attachment"):
            load_policy_from_dict(minimal_policy(requirements=[{"type": "attachment"}]))

    @pytest.mark.parametrize("language", ["und", "english", "e1"])
    def test_unusable_language_rejected(self, language: str) -> None:
        with pytest.raises(PolicyValidationError, match="language"):
            load_policy_from_dict(
                minimal_policy(requirements=[{"type": "audio", "language": language}])
            )

    def test_empty_formats_rejected(self) -> None:
        with pytest.raises(PolicyValidationError, match="supported_formats"):
            load_policy_from_dict(minimal_policy(supported_formats=[]))

    def test_output_format_must_be_listed(self) -> None:
        with pytest.raises(PolicyValidationError, match="output_format"):
            load_policy_from_dict(minimal_policy(output_format="mp4"))

    def test_output_format_normalized(self) -> None:
        policy = load_policy_from_dict(
            minimal_policy(supported_formats=["mkv", "mp4"], output_format=".MP4")
        )

        assert policy.target_format == "mp4"
