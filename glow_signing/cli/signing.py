"""CLI commands for signing credential resolution.

Commands:
    - resolve: Show which source supplies a variant's signing credentials
    - plan: Show the build type profile together with its signing config
    - sources: List configured sources and the signing keys they provide
    - export: Write resolved credentials to a properties file for Gradle

Passwords are masked unless ``--show-value`` is given.

Example:
    $ glow-signing resolve --variant release
    $ glow-signing export --variant release --output build/signing.properties
"""

import json
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import structlog

from glow_signing.build_types import MASK, build_plan
from glow_signing.enums import BuildVariant, SigningField
from glow_signing.exceptions import GlowSigningError
from glow_signing.models import SigningResolution
from glow_signing.resolver import SigningConfigResolver
from glow_signing.sources import EnvironmentSource, dump_properties

log = structlog.get_logger(__name__)

VARIANT_CHOICE = click.Choice([variant.value for variant in BuildVariant])

EXIT_NO_CREDENTIALS = 2


def variant_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--variant",
        type=VARIANT_CHOICE,
        default=BuildVariant.RELEASE.value,
        show_default=True,
        help="Build variant to resolve",
    )(func)


@click.command(name="resolve")
@variant_option
@click.option("--show-value", is_flag=True, help="Show passwords in clear text (default: masked)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("--require", is_flag=True, help="Exit with status 2 when no credentials resolve")
@click.pass_context
def resolve_command(
    ctx: click.Context,
    variant: str,
    show_value: bool,
    output_format: str,
    require: bool,
) -> None:
    """Resolve signing credentials for a build variant.

    Release builds fall back to the debug keystore when nothing resolves;
    that is reported as a notice, not an error, unless --require is given.
    """
    resolution = _resolve(ctx, BuildVariant(variant))

    if output_format == "json":
        click.echo(json.dumps(_resolution_dict(resolution, show_value), indent=2))
    else:
        _echo_resolution(resolution, show_value)
        if not resolution.ok:
            _echo_notice(resolution)

    if require and not resolution.ok:
        sys.exit(EXIT_NO_CREDENTIALS)


@click.command(name="plan")
@variant_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.pass_context
def plan_command(ctx: click.Context, variant: str, output_format: str) -> None:
    """Show the build type profile and the signing config it will use."""
    settings = ctx.obj["settings"]
    resolution = _resolve(ctx, BuildVariant(variant))
    plan = build_plan(resolution, application_id=settings.application_id)

    if output_format == "json":
        click.echo(json.dumps(plan.to_dict(), indent=2))
        return

    data = plan.to_dict()
    click.echo(f"Variant: {data['variant']}")
    click.echo(f"Application id: {data['application_id']}")
    click.echo(f"App name: {data['app_name']}")
    if data["version_name_suffix"]:
        click.echo(f"Version name suffix: {data['version_name_suffix']}")
    click.echo(f"Minify: {data['minify_enabled']}")
    click.echo(f"Shrink resources: {data['shrink_resources']}")
    for proguard_file in data["proguard_files"]:
        click.echo(f"ProGuard: {proguard_file}")
    click.echo(f"Signing config: {plan.signing_config_name}")
    if resolution.ok:
        click.echo(f"Signing source: {resolution.source}")
    else:
        _echo_notice(resolution)


@click.command(name="sources")
@click.pass_context
def sources_command(ctx: click.Context) -> None:
    """List credential sources in priority order.

    Shows which signing keys each source provides, never their values.
    """
    resolver = _build_resolver(ctx)
    keys = [variant.property_key(field) for variant in BuildVariant for field in SigningField]

    for index, source in enumerate(resolver.sources, start=1):
        click.echo(f"{index}. {source.name}: ", nl=False)
        if not source.available:
            click.echo(click.style("Not available", fg="yellow"))
            continue
        click.echo(click.style("Available", fg="green"))

        try:
            present = [key for key in keys if source.lookup(key) is not None]
        except GlowSigningError as e:
            _fail(e)

        for key in present:
            if isinstance(source, EnvironmentSource):
                click.echo(f"   {key} (${source.variable_for(key)})")
            else:
                click.echo(f"   {key}")
        if not present:
            click.echo("   (no signing keys)")


@click.command(name="export")
@variant_option
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Properties file to write",
)
@click.pass_context
def export_command(ctx: click.Context, variant: str, output: Path) -> None:
    """Write resolved credentials as an unsuffixed properties file.

    The file is created with owner-only permissions. Nothing is written when
    no credentials resolve.
    """
    resolution = _resolve(ctx, BuildVariant(variant))
    if resolution.credentials is None:
        _echo_notice(resolution)
        click.echo(click.style("Error: No credentials to export", fg="red"), err=True)
        sys.exit(1)

    content = dump_properties(resolution.credentials.to_gradle_properties())
    try:
        _write_private(output, content)
    except OSError as e:
        click.echo(click.style(f"Error: Cannot write {output}: {e}", fg="red"), err=True)
        sys.exit(1)

    log.info("signing_properties_exported", variant=variant, source=resolution.source)
    click.echo(click.style(f"Wrote {variant} signing properties to {output}", fg="green"))


# Helper functions


def _build_resolver(ctx: click.Context) -> SigningConfigResolver:
    try:
        return SigningConfigResolver.from_settings(ctx.obj["settings"])
    except GlowSigningError as e:
        _fail(e)


def _resolve(ctx: click.Context, variant: BuildVariant) -> SigningResolution:
    resolver = _build_resolver(ctx)
    try:
        return resolver.resolve(variant)
    except GlowSigningError as e:
        _fail(e)


def _fail(error: GlowSigningError):
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    suggestion = getattr(error, "suggestion", None)
    if suggestion:
        click.echo(click.style(f"Suggestion: {suggestion}", fg="yellow"), err=True)
    log.debug("command_failed", exc_info=True)
    sys.exit(1)


def _mask(value: str | None, show_value: bool) -> str | None:
    if value is None or show_value:
        return value
    return MASK


def _resolution_dict(resolution: SigningResolution, show_value: bool) -> dict:
    data: dict = {
        "variant": resolution.variant.value,
        "resolved": resolution.ok,
        "source": resolution.source,
        "notice": resolution.notice,
    }
    if resolution.credentials is not None:
        properties = resolution.credentials.to_gradle_properties()
        for field in SigningField:
            if field.is_secret and field.value in properties:
                properties[field.value] = _mask(properties[field.value], show_value)
        data["properties"] = properties
    if resolution.failure is not None:
        data["reason"] = resolution.failure.reason.value
        data["missing"] = list(resolution.failure.missing)
    return data


def _echo_resolution(resolution: SigningResolution, show_value: bool) -> None:
    click.echo(f"Variant: {resolution.variant}")
    credentials = resolution.credentials
    if credentials is None:
        click.echo("Source: none")
        return

    click.echo(f"Source: {credentials.source}")
    properties = credentials.to_gradle_properties()
    for field in SigningField:
        value = properties.get(field.value)
        if value is None:
            click.echo(f"{field.value}: " + click.style("(not set)", fg="yellow"))
        elif field.is_secret:
            click.echo(f"{field.value}: {_mask(value, show_value)}")
        else:
            click.echo(f"{field.value}: {value}")

    if not show_value:
        click.echo(click.style("Use --show-value to display passwords", fg="yellow"))


def _echo_notice(resolution: SigningResolution) -> None:
    if resolution.notice:
        click.echo(click.style(resolution.notice, fg="yellow"), err=True)


def _write_private(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        # O_CREAT's mode does not apply to an existing file
        os.fchmod(f.fileno(), 0o600)
        f.write(content)
