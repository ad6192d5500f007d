"""
CLI commands for gvm configuration.

Thin wrappers over ``gvm.core.config.loader``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def config() -> None:
    """Configuration — show resolved settings and file location."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show the resolved configuration (file + GVM_* env vars)."""
    from gvm.core.config.loader import load_config
    from gvm.core.errors import ConfigError

    config_path: Path | None = ctx.obj.get("config_path")
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    data = cfg.model_dump(mode="json")
    data["bin_dir"] = str(cfg.bin_dir)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("⚙️  gvm configuration", fg="cyan", bold=True)
    width = max(len(key) for key in data)
    for key, value in data.items():
        click.echo(f"   {key:<{width}}  {value if value is not None else '-'}")


@config.command("path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the config file location and whether it exists."""
    from gvm.core.config.loader import resolve_config_path

    path = resolve_config_path(ctx.obj.get("config_path"))
    click.echo(str(path))
    if not path.is_file():
        click.secho("   (not found, defaults apply)", dim=True)
