"""MediaIntrospector interface for stream catalog extraction."""

from pathlib import Path
from typing import Protocol

from trackplan.core.errors import TrackplanError
from trackplan.domain import ProbeResult


class ProbeFailedError(TrackplanError):
    """Raised when a media file cannot be probed."""

    pass


class MediaIntrospector(Protocol):
    """Protocol for media introspection implementations.

    This protocol defines the interface for listing the streams of a
    media file. The policy engine only ever sees the returned catalog,
    never the prober itself.
    """

    def get_file_info(self, path: Path) -> ProbeResult:
        """Extract the stream catalog of a media file.

        Args:
            path: Path to the media file.

        Returns:
            ProbeResult with the container format and streams.

        Raises:
            ProbeFailedError: If the file cannot be probed.
        """
        ...
