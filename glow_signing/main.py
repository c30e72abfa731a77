"""CLI entry point for glow-signing."""

import sys
from pathlib import Path

import click
import structlog

from glow_signing.cli.signing import export_command, plan_command, resolve_command, sources_command
from glow_signing.config import SigningSettings
from glow_signing.exceptions import ConfigurationError
from glow_signing.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Optional YAML settings file",
)
@click.option(
    "--properties-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to key.properties (overrides settings)",
)
@click.option("--log-level", default=None, help="Logging level (overrides settings)")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    properties_file: Path | None,
    log_level: str | None,
    json_logs: bool,
) -> None:
    """glow-signing: resolve Android signing credentials for Glow builds."""
    try:
        settings = SigningSettings.from_yaml(config) if config else SigningSettings()
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)
    except ValueError as e:
        # Invalid GLOW_SIGNING_* environment values
        click.echo(click.style(f"Error: Invalid settings: {e}", fg="red"), err=True)
        sys.exit(1)

    overrides: dict[str, object] = {}
    if properties_file is not None:
        overrides["properties_file"] = properties_file
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        configure_logging(settings.log_level, json_logs=json_logs)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    log.debug("settings_loaded", properties_file=str(settings.properties_file))
    ctx.obj = {"settings": settings}


cli.add_command(resolve_command)
cli.add_command(plan_command)
cli.add_command(sources_command)
cli.add_command(export_command)


if __name__ == "__main__":
    cli()
