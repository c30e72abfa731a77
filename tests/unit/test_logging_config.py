"""Tests for logging configuration."""

import logging

import pytest

from glow_signing.utils.logging_config import REDACTED, configure_logging, redact_sensitive_data


class TestRedactSensitiveData:
    def test_sensitive_keys_redacted(self):
        event = {
            "event": "signing_source_selected",
            "keyPassword": "pw1",
            "store_password": "pw2",
            "token": "abc",
            "source": "environment",
        }

        result = redact_sensitive_data(None, "info", event)

        assert result["keyPassword"] == REDACTED
        assert result["store_password"] == REDACTED
        assert result["token"] == REDACTED
        assert result["source"] == "environment"
        assert result["event"] == "signing_source_selected"

    def test_nested_dicts(self):
        event = {"event": "x", "context": {"storePassword": "pw2", "variant": "release"}}

        result = redact_sensitive_data(None, "info", event)

        assert result["context"] == {"storePassword": REDACTED, "variant": "release"}


class TestConfigureLogging:
    def test_sets_package_level(self):
        configure_logging("debug")

        assert logging.getLogger("glow_signing").level == logging.DEBUG

    def test_json_logs(self):
        configure_logging("WARNING", json_logs=True)

        assert logging.getLogger("glow_signing").level == logging.WARNING

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("verbose")
