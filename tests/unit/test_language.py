"""Unit tests for language code normalization utilities."""

import pytest

from trackplan.language import (
    is_valid_language_code,
    languages_match,
    normalize_language,
)


class TestNormalizeLanguage:
    """Tests for normalize_language function."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("ru", "rus"),
            ("en", "eng"),
            ("de", "ger"),
            ("deu", "ger"),
            ("fra", "fre"),
            ("zho", "chi"),
            ("rus", "rus"),
            (" ENG ", "eng"),
        ],
    )
    def test_normalizes_to_639_2b(self, code: str, expected: str) -> None:
        assert normalize_language(code) == expected

    @pytest.mark.parametrize("code", [None, "", "und", "UND", "zxx", "mis"])
    def test_undefined_codes(self, code) -> None:
        assert normalize_language(code) is None

    def test_unrecognized_tag_is_untagged(self, caplog) -> None:
        assert normalize_language("english") is None
        assert "Unrecognized language tag 'english'" in caplog.text

    def test_unmapped_two_letter_code(self, caplog) -> None:
        assert normalize_language("qq") is None
        assert "No ISO 639-2 mapping" in caplog.text


class TestLanguagesMatch:
    """Tests for languages_match."""

    def test_same_language_different_standards(self) -> None:
        assert languages_match("ru", "rus")
        assert languages_match("ger", "deu")

    def test_different_languages(self) -> None:
        assert not languages_match("eng", "rus")

    def test_untagged_never_matches(self) -> None:
        assert not languages_match(None, "eng")
        assert not languages_match("und", "und")
        assert not languages_match(None, None)


class TestIsValidLanguageCode:
    """Tests for is_valid_language_code."""

    @pytest.mark.parametrize("code", ["en", "eng", "RUS"])
    def test_valid(self, code: str) -> None:
        assert is_valid_language_code(code)

    @pytest.mark.parametrize("code", [None, "", "e", "engl", "e1", "en-US"])
    def test_invalid(self, code) -> None:
        assert not is_valid_language_code(code)
