"""Custom exception hierarchy for glow-signing.

Exception Hierarchy:
    GlowSigningError (base)
    ├── ConfigurationError
    ├── CredentialSourceError
    │   └── PropertiesFormatError
    └── NoCredentialsAvailableError

Absent credentials are not an error during resolution: the resolver returns
an explicit outcome instead. NoCredentialsAvailableError is only raised when a
caller asks for credentials that did not resolve (SigningResolution.unwrap).

Example Usage:
    >>> from glow_signing.exceptions import ConfigurationError
    >>> try:
    ...     settings = SigningSettings.from_yaml(path)
    ... except ConfigurationError as e:
    ...     print(e.message)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glow_signing.models import NoCredentialsAvailable


class GlowSigningError(Exception):
    """Base exception for all glow-signing errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(GlowSigningError):
    """Configuration-related errors.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Required key.properties file missing
        - Invalid setting values
    """

    pass


class CredentialSourceError(GlowSigningError):
    """A credential source could not be read.

    Attributes:
        message: Human-readable error description
        reference: The source or key that failed (e.g., "properties:key.properties")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The source or key that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Preserve original message (super sets self.message to full_message)
        self.message = message


class PropertiesFormatError(CredentialSourceError):
    """A properties file could not be read or decoded."""

    pass


class NoCredentialsAvailableError(GlowSigningError):
    """Signing credentials were required but none resolved.

    Attributes:
        failure: The failure outcome returned by the resolver
    """

    def __init__(self, failure: NoCredentialsAvailable) -> None:
        self.failure = failure
        super().__init__(failure.message)
