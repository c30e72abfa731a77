"""Credential sources consulted when resolving signing configuration.

This package provides:
- A properties file source for ``key.properties`` (read once, immutable)
- An environment variable source for CI
- An OS keyring source
- An in-memory mapping source

Example usage:

    from glow_signing.sources import EnvironmentSource, PropertiesFileSource

    sources = [PropertiesFileSource("key.properties"), EnvironmentSource()]
"""

from .backend import CredentialSource
from .environment_source import EnvironmentSource
from .keyring_source import KeyringSource
from .properties import dump_properties, load_properties, parse_properties
from .properties_source import MappingSource, PropertiesFileSource

__all__ = [
    "CredentialSource",
    "EnvironmentSource",
    "KeyringSource",
    "MappingSource",
    "PropertiesFileSource",
    "dump_properties",
    "load_properties",
    "parse_properties",
]
