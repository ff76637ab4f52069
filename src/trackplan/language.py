"""Language code normalization for stream metadata and requirement filters.

Containers tag streams with a mix of ISO 639-1 ("ru"), ISO 639-2/B ("ger")
and ISO 639-2/T ("deu") codes. Requirements are matched on exact codes, so
both sides are normalized to ISO 639-2/B (the form MKV and ffmpeg use)
before comparison.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Codes meaning "no usable language"; normalized to None
UNDEFINED_CODES = frozenset({"und", "mis", "zxx", "xxx", "unk"})

# ISO 639-1 -> ISO 639-2/B for languages commonly found in media files
_ISO_639_1_TO_639_2B: dict[str, str] = {
    "ar": "ara",
    "bg": "bul",
    "bn": "ben",
    "ca": "cat",
    "cs": "cze",
    "da": "dan",
    "de": "ger",
    "el": "gre",
    "en": "eng",
    "es": "spa",
    "et": "est",
    "fa": "per",
    "fi": "fin",
    "fr": "fre",
    "he": "heb",
    "hi": "hin",
    "hr": "hrv",
    "hu": "hun",
    "hy": "arm",
    "id": "ind",
    "is": "ice",
    "it": "ita",
    "ja": "jpn",
    "ka": "geo",
    "kk": "kaz",
    "ko": "kor",
    "lt": "lit",
    "lv": "lav",
    "mk": "mac",
    "ms": "may",
    "nl": "dut",
    "no": "nor",
    "pl": "pol",
    "pt": "por",
    "ro": "rum",
    "ru": "rus",
    "sk": "slo",
    "sl": "slv",
    "sq": "alb",
    "sr": "srp",
    "sv": "swe",
    "ta": "tam",
    "th": "tha",
    "tr": "tur",
    "uk": "ukr",
    "uz": "uzb",
    "vi": "vie",
    "zh": "chi",
}

# ISO 639-2/T -> ISO 639-2/B where the two differ
_ISO_639_2T_TO_639_2B: dict[str, str] = {
    "sqi": "alb",
    "hye": "arm",
    "eus": "baq",
    "mya": "bur",
    "zho": "chi",
    "ces": "cze",
    "nld": "dut",
    "fra": "fre",
    "kat": "geo",
    "deu": "ger",
    "ell": "gre",
    "isl": "ice",
    "mkd": "mac",
    "mri": "mao",
    "msa": "may",
    "fas": "per",
    "ron": "rum",
    "slk": "slo",
    "bod": "tib",
    "cym": "wel",
}

_CODE_PATTERN = re.compile(r"^[a-z]{2,3}$")


def normalize_language(code: str | None) -> str | None:
    """Normalize a language tag to ISO 639-2/B.

    Args:
        code: Language tag as found in container metadata or a policy.

    Returns:
        Three-letter ISO 639-2/B code, or None when the tag is absent,
        undefined ("und") or not a recognizable language code.

    Examples:
        >>> normalize_language("ru")
        'rus'
        >>> normalize_language("deu")
        'ger'
        >>> normalize_language("und") is None
        True
    """
    if not code:
        return None

    normalized = code.strip().casefold()
    if not normalized or normalized in UNDEFINED_CODES:
        return None

    if not _CODE_PATTERN.match(normalized):
        logger.warning("Unrecognized language tag '%s', treating as untagged", code)
        return None

    if len(normalized) == 2:
        converted = _ISO_639_1_TO_639_2B.get(normalized)
        if converted is None:
            logger.warning(
                "No ISO 639-2 mapping for language tag '%s', treating as untagged",
                code,
            )
        return converted

    return _ISO_639_2T_TO_639_2B.get(normalized, normalized)


def languages_match(left: str | None, right: str | None) -> bool:
    """Check if two language tags name the same language.

    Untagged values never match anything, including each other.
    """
    left_code = normalize_language(left)
    right_code = normalize_language(right)
    if left_code is None or right_code is None:
        return False
    return left_code == right_code


def is_valid_language_code(code: str | None) -> bool:
    """Check if a tag looks like an ISO 639 code (2 or 3 lowercase letters)."""
    if not code:
        return False
    return bool(_CODE_PATTERN.match(code.strip().casefold()))
