"""Configuration for signing resolution.

Example:
    >>> from glow_signing.config import SigningSettings
    >>> settings = SigningSettings.from_yaml("signing.yaml")
    >>> settings.properties_file
    PosixPath('key.properties')
"""

from glow_signing.config.settings import SigningSettings

__all__ = ["SigningSettings"]
