"""Pure mapping functions for ffprobe to trackplan type conversions."""

from trackplan.domain import StreamType

# Stream type mapping from ffprobe codec_type
FFPROBE_TO_STREAM_TYPE: dict[str, StreamType] = {
    "video": StreamType.VIDEO,
    "audio": StreamType.AUDIO,
    "subtitle": StreamType.SUBTITLE,
    "attachment": StreamType.ATTACHMENT,
    "data": StreamType.DATA,
}


def map_stream_type(codec_type: str | None) -> StreamType:
    """Map ffprobe codec_type to a StreamType (OTHER if unrecognized)."""
    if not codec_type:
        return StreamType.OTHER
    return FFPROBE_TO_STREAM_TYPE.get(codec_type.casefold(), StreamType.OTHER)


# Container format mapping from file extension to ffprobe format name
CONTAINER_FORMAT_MAP: dict[str, str] = {
    "mkv": "matroska",
    "mka": "matroska",
    "mks": "matroska",
    "mp4": "mp4",
    "m4v": "mp4",
    "mov": "mov",
    "avi": "avi",
    "webm": "webm",
    "wmv": "asf",
    "flv": "flv",
    "ts": "mpegts",
    "m2ts": "mpegts",
    "mpg": "mpeg",
    "mpeg": "mpeg",
    "vob": "mpeg",
    "ogv": "ogg",
}


def map_container_format(extension: str | None) -> str | None:
    """Guess the ffprobe format name for a file extension."""
    if not extension:
        return None
    return CONTAINER_FORMAT_MAP.get(extension.lstrip(".").lower())
