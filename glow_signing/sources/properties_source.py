"""Properties file and in-memory mapping sources."""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from glow_signing.exceptions import ConfigurationError

from .properties import load_properties

logger = logging.getLogger(__name__)


class MappingSource:
    """Immutable snapshot of a key/value mapping.

    Example:
        >>> source = MappingSource({"storeFile": "/keys/release.jks"})
        >>> source.lookup("storeFile")
        '/keys/release.jks'
    """

    def __init__(self, values: Mapping[str, str], name: str = "mapping") -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values))
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def available(self) -> bool:
        return True

    @property
    def values(self) -> Mapping[str, str]:
        """Read-only view of the snapshot."""
        return self._values

    def keys(self) -> frozenset[str]:
        return frozenset(self._values)

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def __repr__(self) -> str:
        # Keys only; values may be secrets
        return f"{type(self).__name__}(name={self._name!r}, keys={sorted(self._values)!r})"


class PropertiesFileSource(MappingSource):
    """Signing properties read once from a ``key.properties`` file.

    The file is loaded at construction and never re-read, so every
    resolution against this source sees the same snapshot.

    A missing file yields an empty source, matching the Gradle script that
    only loads key.properties when it exists. Pass ``required=True`` to make
    a missing file a configuration error instead.

    Raises:
        ConfigurationError: If the file is required but missing
        PropertiesFormatError: If the file exists but cannot be read
    """

    def __init__(self, path: Path | str, required: bool = False) -> None:
        self.path = Path(path)
        self.exists = self.path.is_file()

        if self.exists:
            values = load_properties(self.path)
            logger.debug(f"Loaded {len(values)} properties from {self.path}")
        elif required:
            raise ConfigurationError(f"Properties file not found: {self.path}")
        else:
            logger.debug(f"Properties file not found, continuing without it: {self.path}")
            values = {}

        super().__init__(values, name=f"properties:{self.path.name}")
