"""Signing resolution models.

A resolution produces either a SigningCredentials value or a
NoCredentialsAvailable outcome, wrapped in a SigningResolution together with
the notice the caller should surface to the user.

Example:
    >>> resolution = resolver.resolve(BuildVariant.RELEASE)
    >>> if resolution.ok:
    ...     configure_signing(resolution.credentials)
    ... else:
    ...     print(resolution.notice)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, SecretStr

from glow_signing.enums import BuildVariant, FailureReason, SigningField
from glow_signing.exceptions import NoCredentialsAvailableError


class SigningCredentials(BaseModel):
    """Resolved keystore location, alias and passwords.

    Passwords are SecretStr so they never appear in repr, str or logs.
    Fields other than source may be None when the source only partially
    described the keystore and the resolver runs in permissive mode.

    Attributes:
        store_file: Keystore path, None when the source left it empty
        key_alias: Alias of the signing key inside the keystore
        key_password: Password of the signing key
        store_password: Password of the keystore
        source: Name of the source the values were read from
    """

    model_config = ConfigDict(frozen=True)

    store_file: Path | None
    key_alias: str | None = None
    key_password: SecretStr | None = None
    store_password: SecretStr | None = None
    source: str

    def missing_fields(self) -> list[SigningField]:
        """Return the fields that are absent or empty."""
        missing = []
        if self.store_file is None:
            missing.append(SigningField.STORE_FILE)
        if not self.key_alias:
            missing.append(SigningField.KEY_ALIAS)
        if self.key_password is None or not self.key_password.get_secret_value():
            missing.append(SigningField.KEY_PASSWORD)
        if self.store_password is None or not self.store_password.get_secret_value():
            missing.append(SigningField.STORE_PASSWORD)
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_gradle_properties(self) -> dict[str, str]:
        """Render as unsuffixed signing properties with secrets revealed.

        Absent fields are omitted. Only call this when handing the values to
        the external build, never for display.
        """
        values: dict[str, str | None] = {
            SigningField.STORE_FILE.value: str(self.store_file) if self.store_file is not None else None,
            SigningField.KEY_ALIAS.value: self.key_alias,
            SigningField.KEY_PASSWORD.value: (
                self.key_password.get_secret_value() if self.key_password else None
            ),
            SigningField.STORE_PASSWORD.value: (
                self.store_password.get_secret_value() if self.store_password else None
            ),
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class NoCredentialsAvailable:
    """Failure outcome of a resolution.

    Attributes:
        variant: Variant that was resolved
        reason: Why no credentials were produced
        consulted: Names of the sources that were tried, in order
        missing: Property keys that were missing (strict mode)
    """

    variant: BuildVariant
    reason: FailureReason = FailureReason.NO_CREDENTIALS
    consulted: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        if self.reason == FailureReason.INCOMPLETE:
            return (
                f"Incomplete {self.variant} signing configuration, missing: "
                f"{', '.join(self.missing)}"
            )
        if not self.consulted:
            return f"No credential sources configured for {self.variant} signing"
        return f"No {self.variant} storeFile found in: {', '.join(self.consulted)}"


@dataclass(frozen=True)
class SigningResolution:
    """Outcome of resolving one build variant.

    Exactly one of ``credentials`` and ``failure`` is set.

    Attributes:
        variant: Variant that was resolved
        credentials: Resolved credentials on success
        failure: Failure outcome otherwise
        notice: Human-readable notice for the user, never containing values
    """

    variant: BuildVariant
    credentials: SigningCredentials | None = None
    failure: NoCredentialsAvailable | None = None
    notice: str | None = None

    def __post_init__(self) -> None:
        if (self.credentials is None) == (self.failure is None):
            raise ValueError("SigningResolution needs exactly one of credentials or failure")

    @property
    def ok(self) -> bool:
        return self.credentials is not None

    @property
    def source(self) -> str | None:
        """Name of the source that supplied the credentials."""
        return self.credentials.source if self.credentials else None

    def unwrap(self) -> SigningCredentials:
        """Return the credentials or raise if resolution failed.

        Raises:
            NoCredentialsAvailableError: If no credentials resolved
        """
        if self.credentials is None:
            raise NoCredentialsAvailableError(cast(NoCredentialsAvailable, self.failure))
        return self.credentials
