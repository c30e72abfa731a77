"""Enumerations for build variants and signing fields."""

from enum import Enum


class BuildVariant(str, Enum):
    """Android build variants with distinct signing policy.

    Debug credentials are read from the properties file only, using
    ``Debug``-suffixed keys. Release credentials are looked up through the
    whole source chain using the unsuffixed keys.
    """

    DEBUG = "debug"
    RELEASE = "release"

    def __str__(self) -> str:
        return self.value

    @property
    def key_suffix(self) -> str:
        """Suffix appended to property keys for this variant."""
        if self == BuildVariant.DEBUG:
            return "Debug"
        return ""

    @property
    def uses_fallback_chain(self) -> bool:
        """Check if lookups for this variant fall through to later sources."""
        return self == BuildVariant.RELEASE

    def property_key(self, field: "SigningField") -> str:
        """Return the property key requested for ``field`` in this variant.

        Example:
            >>> BuildVariant.DEBUG.property_key(SigningField.STORE_FILE)
            'storeFileDebug'
        """
        return f"{field.value}{self.key_suffix}"


class SigningField(str, Enum):
    """The four values that make up a signing configuration."""

    STORE_FILE = "storeFile"
    KEY_ALIAS = "keyAlias"
    KEY_PASSWORD = "keyPassword"
    STORE_PASSWORD = "storePassword"

    def __str__(self) -> str:
        return self.value

    @property
    def env_var(self) -> str:
        """Environment variable name carrying this field on CI."""
        return {
            SigningField.STORE_FILE: "STORE_FILE",
            SigningField.KEY_ALIAS: "KEY_ALIAS",
            SigningField.KEY_PASSWORD: "KEY_PASSWORD",
            SigningField.STORE_PASSWORD: "STORE_PASSWORD",
        }[self]

    @property
    def is_secret(self) -> bool:
        return self in (SigningField.KEY_PASSWORD, SigningField.STORE_PASSWORD)


class FailureReason(str, Enum):
    """Why a resolution produced no credentials."""

    NO_CREDENTIALS = "no-credentials"
    INCOMPLETE = "incomplete"

    def __str__(self) -> str:
        return self.value
