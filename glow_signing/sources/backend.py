"""Protocol for credential sources consulted during signing resolution."""

from typing import Protocol


class CredentialSource(Protocol):
    """Protocol defining the interface for credential sources.

    Sources are read-only views over externally owned state (a properties
    file snapshot, the process environment, the OS keyring). The resolver
    never mutates them.
    """

    @property
    def name(self) -> str:
        """Source identifier used in diagnostics (e.g., 'environment')."""
        ...

    @property
    def available(self) -> bool:
        """Check if this source can be consulted on the current system."""
        ...

    def lookup(self, key: str) -> str | None:
        """Look up a property-style key.

        Args:
            key: Property key (e.g., 'storeFile', 'keyAliasDebug')

        Returns:
            The value, or None if the source does not provide the key

        Raises:
            CredentialSourceError: If the source fails while reading
        """
        ...
