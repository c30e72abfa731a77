"""Signing credential resolution for Glow Android builds.

Example usage:

    from glow_signing import BuildVariant, SigningConfigResolver, SigningSettings

    resolver = SigningConfigResolver.from_settings(SigningSettings())
    resolution = resolver.resolve(BuildVariant.RELEASE)
    if not resolution.ok:
        print(resolution.notice)
"""

from glow_signing.build_types import BuildPlan, BuildTypeProfile, build_plan, default_profile
from glow_signing.config import SigningSettings
from glow_signing.enums import BuildVariant, FailureReason, SigningField
from glow_signing.exceptions import (
    ConfigurationError,
    CredentialSourceError,
    GlowSigningError,
    NoCredentialsAvailableError,
    PropertiesFormatError,
)
from glow_signing.models import NoCredentialsAvailable, SigningCredentials, SigningResolution
from glow_signing.resolver import SigningConfigResolver

__version__ = "0.1.0"

__all__ = [
    "BuildPlan",
    "BuildTypeProfile",
    "BuildVariant",
    "ConfigurationError",
    "CredentialSourceError",
    "FailureReason",
    "GlowSigningError",
    "NoCredentialsAvailable",
    "NoCredentialsAvailableError",
    "PropertiesFormatError",
    "SigningConfigResolver",
    "SigningCredentials",
    "SigningField",
    "SigningResolution",
    "SigningSettings",
    "build_plan",
    "default_profile",
]
