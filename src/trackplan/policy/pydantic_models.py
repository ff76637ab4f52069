"""Pydantic models for policy file validation.

Policy files come in two dialects: the native one (``type``/``language``/
``level`` per requirement) and the legacy TOML layout
(``what = {Audio = {language = "rus"}}``, hyphenated keys, ``required``).
Both are folded into the same models before field validation runs.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trackplan.domain import SELECTABLE_STREAM_TYPES
from trackplan.language import is_valid_language_code, normalize_language
from trackplan.policy.types import SatisfactionLevel

_SELECTABLE_NAMES = sorted(t.value for t in SELECTABLE_STREAM_TYPES)


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Accept hyphenated spellings of top-level keys."""
    return {
        (k.replace("-", "_") if isinstance(k, str) else k): v for k, v in data.items()
    }


def _unpack_what(what: Any) -> dict[str, Any]:
    """Convert a ``what`` record into ``type``/``language`` fields.

    Accepted forms: ``"Video"``, ``{"Audio": {}}`` and
    ``{"Audio": {"language": "rus"}}``.
    """
    if isinstance(what, str):
        return {"type": what}
    if isinstance(what, dict) and len(what) == 1:
        stream_type, body = next(iter(what.items()))
        fields: dict[str, Any] = {"type": stream_type}
        if body is None:
            return fields
        if not isinstance(body, dict):
            raise ValueError(f"'what.{stream_type}' must be a mapping")
        unknown = set(body) - {"language"}
        if unknown:
            raise ValueError(
                f"Unknown keys in 'what.{stream_type}': {', '.join(sorted(unknown))}"
            )
        if body.get("language") is not None:
            fields["language"] = body["language"]
        return fields
    raise ValueError(
        "'what' must be a stream type name or a single-key mapping like "
        "{Audio = {language = \"rus\"}}"
    )


class RequirementModel(BaseModel):
    """Pydantic model for one requirement."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["video", "audio", "subtitle"]
    language: str | None = None
    level: SatisfactionLevel | None = None
    allow_empty: bool = False

    @model_validator(mode="before")
    @classmethod
    def unpack_what_form(cls, data: Any) -> Any:
        """Fold the ``what`` record form into plain fields."""
        if not isinstance(data, dict):
            return data
        data = _normalize_keys(data)
        if "what" in data:
            if "type" in data or "language" in data:
                raise ValueError("Use either 'what' or 'type'/'language', not both")
            what = data.pop("what")
            data = {**data, **_unpack_what(what)}
        return data

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            normalized = v.strip().casefold()
            if normalized not in _SELECTABLE_NAMES:
                raise ValueError(
                    f"Unknown stream type '{v}'. "
                    f"Must be one of: {', '.join(_SELECTABLE_NAMES)}"
                )
            return normalized
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not is_valid_language_code(v):
            raise ValueError(
                f"Invalid language code '{v}'. "
                "Use ISO 639 codes (e.g., 'eng', 'rus', 'ru')."
            )
        normalized = normalize_language(v)
        if normalized is None:
            raise ValueError(
                f"Language '{v}' is undefined or unknown and cannot be used "
                "as a filter; omit 'language' to match any language"
            )
        return normalized

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return SatisfactionLevel.parse(v)
        return v


class PolicyModel(BaseModel):
    """Pydantic model for a complete policy file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    supported_formats: list[str] = Field(min_length=1)
    supported_codecs: list[str] = Field(min_length=1)
    output_format: str | None = None
    requirement_order: Literal["declared", "specificity"] = "declared"
    requirements: list[RequirementModel] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_layout(cls, data: Any) -> Any:
        """Accept hyphenated keys and ``required`` for ``requirements``."""
        if not isinstance(data, dict):
            return data
        data = _normalize_keys(data)
        if "required" in data:
            if "requirements" in data:
                raise ValueError("Use either 'required' or 'requirements', not both")
            data["requirements"] = data.pop("required")
        return data

    @field_validator("supported_formats")
    @classmethod
    def validate_formats(cls, v: list[str]) -> list[str]:
        normalized = []
        for idx, fmt in enumerate(v):
            value = fmt.strip().lstrip(".").casefold()
            if not value:
                raise ValueError(f"Empty format at supported_formats[{idx}]")
            normalized.append(value)
        return normalized

    @field_validator("supported_codecs")
    @classmethod
    def validate_codecs(cls, v: list[str]) -> list[str]:
        for idx, codec in enumerate(v):
            if not codec.strip():
                raise ValueError(f"Empty codec at supported_codecs[{idx}]")
        return [c.strip() for c in v]

    @field_validator("requirement_order", mode="before")
    @classmethod
    def normalize_order(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().casefold()
        return v

    @model_validator(mode="after")
    def validate_output_format(self) -> PolicyModel:
        if self.output_format is not None:
            fmt = self.output_format.strip().lstrip(".").casefold()
            if fmt not in self.supported_formats:
                raise ValueError(
                    f"output_format '{self.output_format}' is not listed in "
                    "supported_formats"
                )
        return self
