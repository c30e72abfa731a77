"""Environment variable source for CI pipelines."""

import logging
import os
from collections.abc import Mapping

from glow_signing.enums import SigningField

logger = logging.getLogger(__name__)

DEFAULT_KEY_MAP: Mapping[str, str] = {field.value: field.env_var for field in SigningField}


class EnvironmentSource:
    """Read-only view of environment variables.

    Property-style keys are translated to variable names through
    ``key_map`` (``storeFile`` -> ``STORE_FILE`` and so on). Keys without a
    mapping are looked up verbatim.

    Security Considerations:
    - Environment variables are visible to all processes of the user
    - CI systems usually mask them in build logs, this source never logs values

    Example:
        >>> source = EnvironmentSource({"STORE_FILE": "/ci/key.jks"})
        >>> source.lookup("storeFile")
        '/ci/key.jks'
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        key_map: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize environment source.

        Args:
            environ: Mapping to read instead of ``os.environ``
            key_map: Property key to variable name translation
        """
        self._environ = environ if environ is not None else os.environ
        self._key_map = dict(DEFAULT_KEY_MAP if key_map is None else key_map)

    @property
    def name(self) -> str:
        return "environment"

    @property
    def available(self) -> bool:
        """Environment source is always available."""
        return True

    def variable_for(self, key: str) -> str:
        """Return the environment variable consulted for ``key``."""
        return self._key_map.get(key, key)

    def lookup(self, key: str) -> str | None:
        var_name = self.variable_for(key)
        value = self._environ.get(var_name)

        if value is not None:
            logger.debug(f"Found {key} in environment variable {var_name}")

        return value
