"""
gvm — Go Version Manager CLI entrypoint.

Usage:
    gvm list
    gvm list-all
    gvm install 1.22.11
    gvm use 1.22.11
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from gvm import __version__
from gvm.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="gvm")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: ~/.config/gvm/config.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """GVM - Go Version Manager. Manage multiple Go versions side by side."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("GVM_LOG_LEVEL"),
        ),
        log_file=os.environ.get("GVM_LOG_FILE"),
        log_file_level=os.environ.get("GVM_LOG_FILE_LEVEL"),
    )


def _fail(message: str, hint: str | None = None) -> None:
    click.secho(f"❌ {message}", fg="red", err=True)
    if hint:
        click.secho(hint, fg="yellow", err=True)
    sys.exit(1)


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List all installed Go versions."""
    from gvm.core.use_cases.listing import list_installed_versions

    result = list_installed_versions(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error)

    if not result.installed:
        click.secho("No Go versions installed.", fg="yellow")
        click.echo("Use ", nl=False)
        click.secho("gvm install <version>", fg="green", nl=False)
        click.echo(" to install a version.")
        return

    click.secho("Installed Go versions:", bold=True)
    for iv in result.installed:
        if result.is_current(iv):
            click.secho("  -> ", fg="green", bold=True, nl=False)
            click.secho(iv.version.number, fg="green", bold=True, nl=False)
            click.secho(" (current)", dim=True)
        else:
            click.echo(f"     {iv.version.number}")

    if ctx.obj.get("verbose"):
        click.echo()
        click.secho(f"   {result.bin_dir}", dim=True)


@cli.command("list-all")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None,
              help="Number of versions to show (default: catalog_limit).")
@click.option("--all", "show_all", is_flag=True, help="Show every published version.")
@click.option("--stable-only", is_flag=True, help="Hide unstable releases.")
@click.pass_context
def list_all_cmd(
    ctx: click.Context,
    as_json: bool,
    limit: int | None,
    show_all: bool,
    stable_only: bool,
) -> None:
    """List all available Go versions from go.dev."""
    from gvm.core.use_cases.catalog import list_available

    if not as_json and not ctx.obj.get("quiet"):
        click.secho("Fetching available Go versions...", dim=True)

    result = list_available(
        config_path=ctx.obj.get("config_path"),
        limit=0 if show_all else limit,
        stable_only=stable_only,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error)

    click.secho("Available Go versions:", bold=True)
    click.secho("(stable versions marked with *, installed versions marked with ✓)", dim=True)
    click.echo()

    for entry in result.versions:
        install_marker = click.style("✓", fg="green") if entry.installed else " "
        if entry.stable:
            click.echo(f"  {install_marker} " + click.style(f"* {entry.version.number}", fg="cyan"))
        else:
            click.echo(f"  {install_marker}   {entry.version.number}")

    click.echo()
    click.secho(f"Showing latest {result.shown} of {result.total} versions.", dim=True)


@cli.command()
@click.argument("version")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, version: str, as_json: bool) -> None:
    """Install a specific Go version (e.g. 1.22.11 or go1.22.11)."""
    from gvm.core.models.installation import InstallStatus
    from gvm.core.use_cases.install import install_version

    if not as_json:
        click.secho("Installing Go version: ", bold=True, nl=False)
        click.secho(version, fg="green")

    result = install_version(version, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.status is None:
        _fail(result.error or "Install failed")

    number = result.version.number if result.version else version

    if result.status == InstallStatus.ALREADY_INSTALLED:
        click.secho("✓ ", fg="green", bold=True, nl=False)
        click.echo("Go ", nl=False)
        click.secho(number, fg="green", nl=False)
        click.echo(" is already installed.")
    elif result.status == InstallStatus.INSTALLER_FAILED:
        _fail(f"go install failed: {result.error}", result.hint)
    elif result.status == InstallStatus.DOWNLOAD_FAILED:
        click.secho("  ✓ Go wrapper installed", fg="green")
        _fail(f"Download failed: {result.error}")
    else:
        click.secho("  ✓ Go wrapper installed", fg="green")
        click.secho("  ✓ Go SDK downloaded", fg="green")
        click.echo()
        click.secho("✓ ", fg="green", bold=True, nl=False)
        click.echo("Go ", nl=False)
        click.secho(number, fg="green", nl=False)
        click.echo(" installed successfully!")

    click.echo("Use ", nl=False)
    click.secho(f"gvm use {number}", fg="cyan", nl=False)
    click.echo(" to switch to this version.")


@cli.command()
@click.argument("version")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--no-verify", is_flag=True, help="Skip running 'go version' afterwards.")
@click.pass_context
def use(ctx: click.Context, version: str, as_json: bool, no_verify: bool) -> None:
    """Use a specific Go version (e.g. 1.22.11 or go1.22.11)."""
    from gvm.core.models.installation import UseStatus
    from gvm.core.use_cases.use import use_version

    result = use_version(
        version,
        config_path=ctx.obj.get("config_path"),
        verify=not no_verify,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.status == UseStatus.NOT_INSTALLED:
        number = result.version.number if result.version else version
        _fail(
            f"Go {number} is not installed.",
            f"Run 'gvm install {number}' to install it first.",
        )
    if not result.ok:
        _fail(result.error or "Activation failed")

    assert result.version is not None
    if result.status == UseStatus.ALREADY_ACTIVE:
        click.secho("✓ ", fg="green", bold=True, nl=False)
        click.echo("Already using Go ", nl=False)
        click.secho(result.version.number, fg="green")
    else:
        click.secho("✓ ", fg="green", bold=True, nl=False)
        click.echo("Now using Go ", nl=False)
        click.secho(result.version.number, fg="green")
        if result.previous and not ctx.obj.get("quiet"):
            click.secho(f"  (was {result.previous.number})", dim=True)

    if result.go_version:
        click.secho(result.go_version, dim=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def current(ctx: click.Context, as_json: bool) -> None:
    """Show the active Go version."""
    from gvm.core.use_cases.listing import get_current_version

    result = get_current_version(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        _fail(result.error)

    if result.current is None:
        click.secho("No Go version is active.", fg="yellow")
        return

    click.echo(result.current.number)
    if ctx.obj.get("verbose"):
        click.secho(f"   {result.pointer} -> {result.target}", dim=True)


# ── Register sub-command groups from gvm/ui/cli/ ──────────────────

from gvm.ui.cli.config import config  # noqa: E402

cli.add_command(config)


if __name__ == "__main__":
    cli()
