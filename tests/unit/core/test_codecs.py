"""Unit tests for the codec registry and alias matching."""

import pytest

from trackplan.core.codecs import (
    canonical_codec,
    codec_in,
    codec_stream_type,
    codecs_match,
    dedupe_codecs,
    encoder_for,
    get_codec_info,
)
from trackplan.domain import StreamType


class TestCanonicalCodec:
    """Tests for canonical_codec and codecs_match."""

    @pytest.mark.parametrize(
        "codec,expected",
        [
            ("HEVC", "hevc"),
            ("h265", "hevc"),
            ("AVC", "h264"),
            ("MPEG2VIDEO", "mpeg2video"),
            ("dca", "dts"),
            ("srt", "subrip"),
            ("weird_codec", "weird_codec"),
            (None, ""),
        ],
    )
    def test_canonical(self, codec, expected: str) -> None:
        assert canonical_codec(codec) == expected

    def test_codecs_match(self) -> None:
        assert codecs_match("hevc", "H265")
        assert not codecs_match("hevc", "h264")
        assert not codecs_match(None, "hevc")
        assert not codecs_match("", "")

    def test_codec_in(self) -> None:
        allowed = ("HEVC", "AAC")

        assert codec_in("hevc", allowed)
        assert codec_in("mp4a", allowed)
        assert not codec_in("ac3", allowed)
        assert not codec_in(None, allowed)


class TestCodecRegistry:
    """Tests for registry lookups."""

    def test_stream_types(self) -> None:
        assert codec_stream_type("H264") == StreamType.VIDEO
        assert codec_stream_type("aac") == StreamType.AUDIO
        assert codec_stream_type("ass") == StreamType.SUBTITLE
        assert codec_stream_type("ttf") is None

    def test_encoders(self) -> None:
        assert encoder_for("HEVC") == "libx265"
        assert encoder_for("AAC") == "aac"
        assert encoder_for("subrip") == "srt"
        assert encoder_for("VC1") is None
        assert encoder_for("unknown") is None

    def test_decode_only(self) -> None:
        info = get_codec_info("vc-1")

        assert info is not None
        assert info.name == "vc1"
        assert not info.can_encode


class TestDedupeCodecs:
    """Tests for dedupe_codecs."""

    def test_alias_duplicates_dropped(self) -> None:
        assert dedupe_codecs(["HEVC", "h265", "AAC", "aac", ""]) == ("HEVC", "AAC")

    def test_unknown_codec_kept_with_warning(self, caplog) -> None:
        assert dedupe_codecs(["HEVC", "mycodec"]) == ("HEVC", "mycodec")
        assert "'mycodec' is not a recognized codec" in caplog.text
