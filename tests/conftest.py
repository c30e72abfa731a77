"""Pytest configuration and shared fixtures."""

import logging
import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest
import structlog

SIGNING_ENV_VARS = ("STORE_FILE", "KEY_ALIAS", "KEY_PASSWORD", "STORE_PASSWORD")


@pytest.fixture(autouse=True)
def clean_signing_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CI signing variables and settings overrides out of tests."""
    for var in SIGNING_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    for var in list(os.environ):
        if var.startswith("GLOW_SIGNING_"):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
    logger = logging.getLogger("glow_signing")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def release_properties() -> dict[str, str]:
    """Complete release quadruple as found in key.properties."""
    return {
        "storeFile": "/keys/release.jks",
        "keyAlias": "prod",
        "keyPassword": "pw1",
        "storePassword": "pw2",
    }


@pytest.fixture
def debug_properties() -> dict[str, str]:
    """Complete debug quadruple as found in key.properties."""
    return {
        "storeFileDebug": "/keys/debug.jks",
        "keyAliasDebug": "dev",
        "keyPasswordDebug": "dpw1",
        "storePasswordDebug": "dpw2",
    }


@pytest.fixture
def ci_environ() -> dict[str, str]:
    """Signing variables as injected by CI."""
    return {
        "STORE_FILE": "/ci/key.jks",
        "KEY_ALIAS": "ci",
        "KEY_PASSWORD": "p",
        "STORE_PASSWORD": "q",
    }


@pytest.fixture
def write_properties(tmp_path: Path) -> Callable[..., Path]:
    """Write a key.properties file and return its path."""

    def _write(values: dict[str, str] | None = None, content: str | None = None) -> Path:
        path = tmp_path / "key.properties"
        if content is None:
            content = "".join(f"{key}={value}\n" for key, value in (values or {}).items())
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def spy_source() -> Callable[..., Mock]:
    """Create a mock credential source backed by a dict."""

    def _make(name: str, values: dict[str, str] | None = None, available: bool = True) -> Mock:
        source = Mock()
        source.name = name
        source.available = available
        source.lookup.side_effect = (values or {}).get
        return source

    return _make
