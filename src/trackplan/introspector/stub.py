"""Stub implementation of MediaIntrospector for dry runs and testing."""

from pathlib import Path

from trackplan.domain import MediaStream, ProbeResult
from trackplan.introspector.interface import ProbeFailedError
from trackplan.introspector.mappings import map_container_format


class StubIntrospector:
    """Introspector that serves canned stream catalogs.

    Catalogs are keyed by path; lookups fall back to the file name, then
    to ``default_streams`` if one was given. It never touches the disk,
    so plans can be produced for files that do not exist.
    """

    def __init__(
        self,
        catalogs: dict[str | Path, list[MediaStream] | tuple[MediaStream, ...]]
        | None = None,
        default_streams: list[MediaStream] | tuple[MediaStream, ...] | None = None,
    ) -> None:
        self._catalogs = {str(k): tuple(v) for k, v in (catalogs or {}).items()}
        self._default = tuple(default_streams) if default_streams is not None else None

    def add(self, path: str | Path, streams: list[MediaStream]) -> None:
        """Register a catalog for a path."""
        self._catalogs[str(path)] = tuple(streams)

    def get_file_info(self, path: Path) -> ProbeResult:
        """Return the canned catalog for a path.

        Raises:
            ProbeFailedError: If no catalog is registered for the path.
        """
        streams = self._catalogs.get(str(path))
        if streams is None:
            streams = self._catalogs.get(path.name, self._default)
        if streams is None:
            raise ProbeFailedError(f"No catalog registered for {path}")

        return ProbeResult(
            file_path=path,
            container_format=map_container_format(path.suffix),
            streams=streams,
        )
