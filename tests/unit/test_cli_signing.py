"""Unit tests for the glow-signing CLI."""

import json
import os
import stat
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from glow_signing.main import cli
from glow_signing.sources import load_properties


@pytest.fixture
def cli_runner():
    """Create CLI runner for testing Click commands."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Invoke the CLI with logging kept out of the output."""

    def _invoke(*args: str):
        return cli_runner.invoke(cli, ["--log-level", "ERROR", *args])

    return _invoke


@pytest.fixture
def release_file(write_properties, release_properties):
    return write_properties(release_properties)


@pytest.fixture
def ci_env(monkeypatch, ci_environ):
    for name, value in ci_environ.items():
        monkeypatch.setenv(name, value)
    return ci_environ


class TestResolveCommand:
    def test_release_from_properties(self, invoke, release_file):
        result = invoke("--properties-file", str(release_file), "resolve", "--variant", "release")

        assert result.exit_code == 0
        assert "Source: properties:key.properties" in result.output
        assert "storeFile: /keys/release.jks" in result.output
        assert "keyAlias: prod" in result.output
        assert "keyPassword: ********" in result.output
        assert "pw1" not in result.output
        assert "pw2" not in result.output

    def test_show_value(self, invoke, release_file):
        result = invoke("--properties-file", str(release_file), "resolve", "--show-value")

        assert result.exit_code == 0
        assert "keyPassword: pw1" in result.output
        assert "storePassword: pw2" in result.output

    def test_release_from_environment(self, invoke, tmp_path, ci_env):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "resolve")

        assert result.exit_code == 0
        assert "Source: environment" in result.output
        assert "storeFile: /ci/key.jks" in result.output

    def test_release_fallback_is_not_fatal(self, invoke, tmp_path):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "resolve")

        assert result.exit_code == 0
        assert "Source: none" in result.output
        assert "release builds will use debug keystore" in result.output

    def test_require_turns_fallback_into_failure(self, invoke, tmp_path):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "resolve", "--require")

        assert result.exit_code == 2

    def test_debug_ignores_environment(self, invoke, tmp_path, ci_env):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "resolve", "--variant", "debug")

        assert result.exit_code == 0
        assert "Source: none" in result.output
        assert "default debug keystore" in result.output

    def test_partial_credentials_marked(self, invoke, write_properties):
        path = write_properties({"storeFileDebug": "/keys/debug.jks"})

        result = invoke("--properties-file", str(path), "resolve", "--variant", "debug")

        assert result.exit_code == 0
        assert "keyAlias: (not set)" in result.output

    def test_json_output(self, invoke, release_file):
        result = invoke("--properties-file", str(release_file), "resolve", "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["resolved"] is True
        assert data["source"] == "properties:key.properties"
        assert data["properties"]["storeFile"] == "/keys/release.jks"
        assert data["properties"]["storePassword"] == "********"

    def test_json_output_failure(self, invoke, tmp_path):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "resolve", "--format", "json")

        data = json.loads(result.output)
        assert data["resolved"] is False
        assert data["reason"] == "no-credentials"
        assert data["notice"] == "No storeFile provided, release builds will use debug keystore"

    def test_required_properties_file_missing(self, invoke, tmp_path, monkeypatch):
        monkeypatch.setenv("GLOW_SIGNING_PROPERTIES_REQUIRED", "true")

        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "resolve")

        assert result.exit_code == 1
        assert "Properties file not found" in result.output

    def test_malformed_properties_file(self, invoke, write_properties):
        path = write_properties(content="storeFile=\\uXYZW\n")

        result = invoke("--properties-file", str(path), "resolve")

        assert result.exit_code == 1
        assert "Malformed" in result.output


class TestPlanCommand:
    def test_release_plan(self, invoke, release_file):
        result = invoke("--properties-file", str(release_file), "plan", "--variant", "release")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["application_id"] == "com.breez.spark.glow"
        assert data["minify_enabled"] is True
        assert data["signing"]["config"] == "release"
        assert data["signing"]["properties"]["keyPassword"] == "********"

    def test_release_plan_falls_back_to_debug_signing(self, invoke, tmp_path):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "plan")

        data = json.loads(result.output)
        assert data["signing"]["config"] == "debug"
        assert data["signing"]["resolved"] is False

    def test_debug_plan_text(self, invoke, tmp_path):
        result = invoke(
            "--properties-file", str(tmp_path / "missing.properties"), "plan", "--variant", "debug", "--format", "text"
        )

        assert result.exit_code == 0
        assert "Application id: com.breez.spark.glow.dev" in result.output
        assert "App name: Glow - Debug" in result.output
        assert "Version name suffix: -debug" in result.output
        assert "Signing config: debug" in result.output


class TestSourcesCommand:
    def test_lists_sources_and_keys(self, invoke, release_file, monkeypatch):
        monkeypatch.setenv("STORE_FILE", "/ci/key.jks")

        result = invoke("--properties-file", str(release_file), "sources")

        assert result.exit_code == 0
        assert "1. properties:key.properties: Available" in result.output
        assert "   storeFile\n" in result.output
        assert "2. environment: Available" in result.output
        assert "storeFile ($STORE_FILE)" in result.output
        assert "pw1" not in result.output
        assert "/ci/key.jks" not in result.output

    def test_empty_sources(self, invoke, tmp_path):
        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "sources")

        assert result.exit_code == 0
        assert "(no signing keys)" in result.output


class TestExportCommand:
    def test_export_writes_private_file(self, invoke, release_file, release_properties, tmp_path):
        output = tmp_path / "build" / "signing.properties"

        result = invoke("--properties-file", str(release_file), "export", "--output", str(output))

        assert result.exit_code == 0
        assert load_properties(output) == release_properties
        assert stat.S_IMODE(output.stat().st_mode) == 0o600

    def test_export_tightens_existing_file_before_writing(self, invoke, release_file, tmp_path):
        output = tmp_path / "signing.properties"
        output.write_text("stale=1\n")
        output.chmod(0o644)
        modes = []
        real_fchmod = os.fchmod

        def recording_fchmod(fd, mode):
            modes.append((output.read_text(), mode))
            real_fchmod(fd, mode)

        with patch("glow_signing.cli.signing.os.fchmod", side_effect=recording_fchmod):
            result = invoke("--properties-file", str(release_file), "export", "--output", str(output))

        assert result.exit_code == 0
        assert modes == [("", 0o600)]
        assert stat.S_IMODE(output.stat().st_mode) == 0o600
        assert "pw1" in output.read_text()

    def test_export_debug_uses_unsuffixed_keys(self, invoke, write_properties, debug_properties, tmp_path):
        output = tmp_path / "signing.properties"

        result = invoke(
            "--properties-file", str(write_properties(debug_properties)), "export", "--variant", "debug", "--output", str(output)
        )

        assert result.exit_code == 0
        assert load_properties(output)["storeFile"] == "/keys/debug.jks"

    def test_export_without_credentials(self, invoke, tmp_path):
        output = tmp_path / "signing.properties"

        result = invoke("--properties-file", str(tmp_path / "missing.properties"), "export", "--output", str(output))

        assert result.exit_code == 1
        assert not output.exists()


class TestGlobalOptions:
    def test_config_file(self, invoke, release_file, tmp_path):
        config = tmp_path / "signing.yaml"
        config.write_text(f"properties_file: {release_file}\n")

        result = invoke("--config", str(config), "resolve")

        assert result.exit_code == 0
        assert "Source: properties:key.properties" in result.output

    def test_missing_config_file(self, invoke, tmp_path):
        result = invoke("--config", str(tmp_path / "nope.yaml"), "resolve")

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_invalid_log_level(self, cli_runner):
        result = cli_runner.invoke(cli, ["--log-level", "loud", "sources"])

        assert result.exit_code == 1
        assert "Invalid log level" in result.output

    def test_invalid_environment_settings(self, invoke, monkeypatch):
        monkeypatch.setenv("GLOW_SIGNING_STRICT", "maybe")

        result = invoke("sources")

        assert result.exit_code == 1
        assert "Invalid settings" in result.output
