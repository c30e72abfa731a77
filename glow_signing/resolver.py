"""Signing configuration resolution with prioritized source fallback."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import SecretStr

from glow_signing.enums import BuildVariant, FailureReason, SigningField
from glow_signing.models import NoCredentialsAvailable, SigningCredentials, SigningResolution
from glow_signing.sources import (
    CredentialSource,
    EnvironmentSource,
    KeyringSource,
    PropertiesFileSource,
)

if TYPE_CHECKING:
    from glow_signing.config.settings import SigningSettings

log = structlog.get_logger(__name__)

RELEASE_FALLBACK_NOTICE = "No storeFile provided, release builds will use debug keystore"
DEBUG_FALLBACK_NOTICE = "No storeFileDebug provided, debug builds will use the default debug keystore"

_SIBLING_FIELDS = (
    SigningField.KEY_ALIAS,
    SigningField.KEY_PASSWORD,
    SigningField.STORE_PASSWORD,
)


class SigningConfigResolver:
    """Resolve signing credentials for a build variant.

    Sources are consulted in priority order and the first one that provides
    a keystore path wins. The remaining fields are read from that same
    source; values are never merged across sources.

    Debug resolution only ever consults the first source (the local
    properties file). Release resolution walks the whole chain, which by
    default is key.properties, then environment variables, then optionally
    the OS keyring.

    Absent credentials are not an error: resolve() returns a failed
    SigningResolution and the caller keeps its default (debug) signing
    identity.

    Example:
        >>> resolver = SigningConfigResolver(
        ...     [PropertiesFileSource("key.properties"), EnvironmentSource()]
        ... )
        >>> resolution = resolver.resolve(BuildVariant.RELEASE)
        >>> resolution.source
        'environment'
    """

    def __init__(
        self,
        sources: Sequence[CredentialSource],
        *,
        strict: bool = False,
        base_dir: Path | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            sources: Credential sources in priority order
            strict: Fail with an INCOMPLETE outcome when the winning source
                lacks the alias or a password instead of returning partial
                credentials
            base_dir: Directory relative keystore paths are resolved against
        """
        self._sources: tuple[CredentialSource, ...] = tuple(sources)
        self.strict = strict
        self.base_dir = base_dir

    @property
    def sources(self) -> tuple[CredentialSource, ...]:
        return self._sources

    @classmethod
    def from_settings(
        cls,
        settings: SigningSettings,
        environ: Mapping[str, str] | None = None,
    ) -> SigningConfigResolver:
        """Build the default source chain from settings.

        Args:
            settings: Signing settings
            environ: Environment mapping to read instead of os.environ

        Raises:
            ConfigurationError: If a required properties file is missing
            PropertiesFormatError: If the properties file cannot be read
        """
        sources: list[CredentialSource] = [
            PropertiesFileSource(settings.properties_file, required=settings.properties_required)
        ]
        if settings.use_environment:
            sources.append(EnvironmentSource(environ))
        if settings.keyring_service:
            sources.append(KeyringSource(settings.keyring_service))

        return cls(sources, strict=settings.strict, base_dir=settings.base_dir)

    def resolve(self, variant: BuildVariant | str) -> SigningResolution:
        """Resolve signing credentials for ``variant``.

        Args:
            variant: Build variant to resolve

        Returns:
            SigningResolution carrying either credentials or a failure

        Raises:
            CredentialSourceError: If a source fails while reading
        """
        variant = BuildVariant(variant)
        candidates = self._sources if variant.uses_fallback_chain else self._sources[:1]
        store_key = variant.property_key(SigningField.STORE_FILE)

        consulted: list[str] = []
        for source in candidates:
            if not source.available:
                log.debug("signing_source_unavailable", variant=variant.value, source=source.name)
                continue

            consulted.append(source.name)
            store_file = source.lookup(store_key)
            if store_file is not None:
                return self._resolve_from(variant, source, store_file, tuple(consulted))

        return self._no_credentials(variant, tuple(consulted))

    def resolve_all(self) -> dict[BuildVariant, SigningResolution]:
        """Resolve every build variant."""
        return {variant: self.resolve(variant) for variant in BuildVariant}

    def _resolve_from(
        self,
        variant: BuildVariant,
        source: CredentialSource,
        store_file: str,
        consulted: tuple[str, ...],
    ) -> SigningResolution:
        values = {field: source.lookup(variant.property_key(field)) for field in _SIBLING_FIELDS}

        missing = [variant.property_key(field) for field, value in values.items() if not value]
        if not store_file:
            missing.insert(0, variant.property_key(SigningField.STORE_FILE))

        if missing and self.strict:
            failure = NoCredentialsAvailable(
                variant=variant,
                reason=FailureReason.INCOMPLETE,
                consulted=consulted,
                missing=tuple(missing),
            )
            log.warning(
                "signing_credentials_incomplete",
                variant=variant.value,
                source=source.name,
                missing=missing,
            )
            return SigningResolution(variant=variant, failure=failure, notice=failure.message)

        if missing:
            log.warning(
                "signing_credentials_partial",
                variant=variant.value,
                source=source.name,
                missing=missing,
            )

        credentials = SigningCredentials(
            store_file=self._store_path(store_file),
            key_alias=values[SigningField.KEY_ALIAS],
            key_password=_secret(values[SigningField.KEY_PASSWORD]),
            store_password=_secret(values[SigningField.STORE_PASSWORD]),
            source=source.name,
        )

        log.info("signing_source_selected", variant=variant.value, source=source.name)
        return SigningResolution(
            variant=variant,
            credentials=credentials,
            notice=f"Using key properties from {source.name}",
        )

    def _no_credentials(self, variant: BuildVariant, consulted: tuple[str, ...]) -> SigningResolution:
        failure = NoCredentialsAvailable(variant=variant, consulted=consulted)

        if variant == BuildVariant.RELEASE:
            log.warning("release_signing_fallback", consulted=list(consulted))
            notice = RELEASE_FALLBACK_NOTICE
        else:
            log.debug("debug_signing_default", consulted=list(consulted))
            notice = DEBUG_FALLBACK_NOTICE

        return SigningResolution(variant=variant, failure=failure, notice=notice)

    def _store_path(self, store_file: str) -> Path | None:
        # Path("") is Path("."), which would point Gradle at the working directory
        if not store_file:
            return None
        path = Path(store_file)
        if self.base_dir is not None and not path.is_absolute():
            return self.base_dir / path
        return path


def _secret(value: str | None) -> SecretStr | None:
    return SecretStr(value) if value is not None else None
