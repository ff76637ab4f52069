"""Capability resolution: keep a stream as-is or pick a transcode target."""

from __future__ import annotations

from trackplan.domain import MediaStream
from trackplan.policy.evaluator.exceptions import NoCompatibleCodecError
from trackplan.policy.types import CapabilitySet, StreamAction


def resolve_stream_action(
    stream: MediaStream,
    capabilities: CapabilitySet,
) -> StreamAction:
    """Decide how a kept stream reaches the output.

    Args:
        stream: Stream that will be present in the output.
        capabilities: Allowed formats and codecs for this run.

    Returns:
        KEEP_AS_IS if the stream codec is supported, otherwise TRANSCODE to
        the first encodable supported codec of the same stream type.

    Raises:
        NoCompatibleCodecError: If the codec is unsupported and no
            supported codec of the stream's type can be encoded.
    """
    if capabilities.supports_codec(stream.codec):
        return StreamAction.keep()

    target = capabilities.transcode_target(stream.stream_type)
    if target is None:
        raise NoCompatibleCodecError(stream)
    return StreamAction.transcode(target)
