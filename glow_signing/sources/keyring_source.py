"""OS keyring source for developer machines.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker

Store values with the property key as username, e.g.::

    keyring set glow-signing storePassword
"""

import logging
from typing import cast

import keyring
from keyring.backends import fail
from keyring.errors import KeyringError

from glow_signing.exceptions import CredentialSourceError

logger = logging.getLogger(__name__)

DEFAULT_SERVICE = "glow-signing"


class KeyringSource:
    """Signing properties stored in the OS keyring.

    Each property key is stored as a separate password under ``service``.

    Example:
        >>> source = KeyringSource("glow-signing")
        >>> source.lookup("storePassword")
    """

    def __init__(self, service: str = DEFAULT_SERVICE) -> None:
        self.service = service

    @property
    def name(self) -> str:
        return f"keyring:{self.service}"

    @property
    def available(self) -> bool:
        """Check if a usable keyring backend is configured.

        Returns False on headless systems where keyring falls back to its
        fail backend, or when the backend cannot be initialized.
        """
        try:
            backend = keyring.get_keyring()
        except Exception as e:
            logger.debug(f"Keyring not available: {e}")
            return False
        return not isinstance(backend, fail.Keyring)

    def lookup(self, key: str) -> str | None:
        """Retrieve a property from the keyring.

        Returns None when the keyring is unavailable.

        Raises:
            CredentialSourceError: If the keyring operation fails
        """
        if not self.available:
            return None

        try:
            value = cast(str | None, keyring.get_password(self.service, key))
        except KeyringError as e:
            raise CredentialSourceError(
                f"Keyring operation failed: {e}",
                reference=f"{self.name}/{key}",
                suggestion="Unlock the keyring or unset GLOW_SIGNING_KEYRING_SERVICE",
            ) from e

        if value is not None:
            logger.debug(f"Found {key} in keyring service {self.service}")
        return value
