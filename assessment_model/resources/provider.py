"""Resource providers for fetching node payloads by name and version.

Loads resources from a directory structure:
    <root>/<name>.json
    <root>/<name>/<version>.json

Where version uses dashes instead of dots (e.g., 1-0-0.json for 1.0.0).
"""

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from assessment_model.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceProvider(Protocol):
    """Fetches raw resource bytes for the unpack engine.

    Implementations may block on I/O. They raise ResourceNotFoundError when
    the resource does not exist; the engine propagates it unchanged.
    """

    def fetch_resource(self, name: str, version: str | None = None) -> bytes:
        """Fetch a resource by name and optional version."""
        ...


class DirectoryResourceProvider:
    """Resource provider backed by a directory of JSON files."""

    def __init__(self, root: Path | str) -> None:
        """Initialize the provider.

        Args:
            root: Directory containing the resource files.
        """
        self.root = Path(root)
        self._cache: dict[tuple[str, str | None], bytes] = {}

    def _version_to_filename(self, version: str) -> str:
        """Convert version string to filename (1.0.0 -> 1-0-0.json)."""
        return version.replace(".", "-") + ".json"

    def _get_resource_path(self, name: str, version: str | None) -> Path:
        """Get the path to a resource file."""
        if version:
            versioned = self.root / name / self._version_to_filename(version)
            if versioned.exists():
                return versioned
        return self.root / f"{name}.json"

    def fetch_resource(self, name: str, version: str | None = None) -> bytes:
        """Read a resource file.

        Raises:
            ResourceNotFoundError: If no file exists for the name and version.
        """
        cache_key = (name, version)
        if cache_key in self._cache:
            return self._cache[cache_key]

        path = self._get_resource_path(name, version)
        if not path.exists():
            raise ResourceNotFoundError(name, version)

        logger.debug(f"Fetching resource {name}@{version or 'latest'} from {path}")
        data = path.read_bytes()
        self._cache[cache_key] = data
        return data

    def list_resources(self) -> list[str]:
        """List all available resource names."""
        if not self.root.exists():
            return []
        names = {f.stem for f in self.root.glob("*.json")}
        names.update(d.name for d in self.root.iterdir() if d.is_dir())
        return sorted(names)

    def list_versions(self, name: str) -> list[str]:
        """List all available versions for a resource."""
        resource_path = self.root / name
        if not resource_path.is_dir():
            return []
        # Convert filename back to version (1-0-0.json -> 1.0.0)
        return sorted(f.stem.replace("-", ".") for f in resource_path.glob("*.json"))


class InMemoryResourceProvider:
    """Resource provider backed by a dict, for tests and embedding hosts."""

    def __init__(self, resources: dict[str, bytes | str] | None = None) -> None:
        self._resources: dict[tuple[str, str | None], bytes] = {}
        for name, data in (resources or {}).items():
            self.add(name, data)

    def add(self, name: str, data: bytes | str, version: str | None = None) -> None:
        """Add a resource, optionally pinned to a version."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._resources[(name, version)] = data

    def fetch_resource(self, name: str, version: str | None = None) -> bytes:
        """Return a stored resource, falling back to the unversioned entry.

        Raises:
            ResourceNotFoundError: If the resource was never added.
        """
        for key in ((name, version), (name, None)):
            if key in self._resources:
                return self._resources[key]
        raise ResourceNotFoundError(name, version)
