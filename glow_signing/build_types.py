"""Per-variant build profiles that consume the resolved signing config.

These mirror the build types of the Glow Android app. They are plain data
for the external build system; nothing here compiles or packages anything.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from glow_signing.enums import BuildVariant
from glow_signing.models import SigningResolution

DEFAULT_APPLICATION_ID = "com.breez.spark.glow"
APP_NAME = "Glow"

MASK = "********"


class BuildTypeProfile(BaseModel):
    """Declarative settings of one Android build type."""

    model_config = ConfigDict(frozen=True)

    variant: BuildVariant
    application_id: str = DEFAULT_APPLICATION_ID
    application_id_suffix: str = ""
    version_name_suffix: str = ""
    app_name: str = APP_NAME
    minify_enabled: bool = False
    shrink_resources: bool = False
    proguard_files: tuple[str, ...] = ()

    @property
    def effective_application_id(self) -> str:
        return f"{self.application_id}{self.application_id_suffix}"


def default_profile(
    variant: BuildVariant | str,
    application_id: str = DEFAULT_APPLICATION_ID,
) -> BuildTypeProfile:
    """Return the stock profile for ``variant``.

    Debug builds install side by side with release builds through the
    ``.dev`` id suffix. Release builds are minified and resource-shrunk.
    """
    variant = BuildVariant(variant)
    if variant == BuildVariant.DEBUG:
        return BuildTypeProfile(
            variant=variant,
            application_id=application_id,
            application_id_suffix=".dev",
            version_name_suffix="-debug",
            app_name=f"{APP_NAME} - Debug",
        )
    return BuildTypeProfile(
        variant=variant,
        application_id=application_id,
        app_name=APP_NAME,
        minify_enabled=True,
        shrink_resources=True,
        proguard_files=("proguard-android-optimize.txt", "proguard-rules.pro"),
    )


@dataclass(frozen=True)
class BuildPlan:
    """A build profile together with the signing resolution it uses.

    Attributes:
        profile: Build type settings
        resolution: Signing resolution for the same variant
    """

    profile: BuildTypeProfile
    resolution: SigningResolution

    def __post_init__(self) -> None:
        if self.profile.variant != self.resolution.variant:
            raise ValueError(
                f"Profile variant {self.profile.variant} does not match "
                f"resolution variant {self.resolution.variant}"
            )

    @property
    def signing_config_name(self) -> str:
        """Signing config the build type should use.

        A release build without resolved credentials is signed with the
        debug identity.
        """
        if self.resolution.ok:
            return self.profile.variant.value
        return BuildVariant.DEBUG.value

    def to_dict(self, reveal_secrets: bool = False) -> dict[str, Any]:
        """Render as a JSON-safe dict.

        Args:
            reveal_secrets: Include passwords in clear text
        """
        signing: dict[str, Any] = {
            "config": self.signing_config_name,
            "resolved": self.resolution.ok,
            "source": self.resolution.source,
            "notice": self.resolution.notice,
        }
        credentials = self.resolution.credentials
        if credentials is not None:
            properties = credentials.to_gradle_properties()
            if not reveal_secrets:
                for key in ("keyPassword", "storePassword"):
                    if key in properties:
                        properties[key] = MASK
            signing["properties"] = properties
        if self.resolution.failure is not None:
            signing["failure"] = {
                "reason": self.resolution.failure.reason.value,
                "consulted": list(self.resolution.failure.consulted),
                "missing": list(self.resolution.failure.missing),
            }

        return {
            "variant": self.profile.variant.value,
            "application_id": self.profile.effective_application_id,
            "version_name_suffix": self.profile.version_name_suffix,
            "app_name": self.profile.app_name,
            "minify_enabled": self.profile.minify_enabled,
            "shrink_resources": self.profile.shrink_resources,
            "proguard_files": list(self.profile.proguard_files),
            "signing": signing,
        }


def build_plan(
    resolution: SigningResolution,
    application_id: str = DEFAULT_APPLICATION_ID,
) -> BuildPlan:
    """Pair a resolution with the default profile of its variant."""
    return BuildPlan(profile=default_profile(resolution.variant, application_id), resolution=resolution)
