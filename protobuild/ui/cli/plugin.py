"""
CLI commands for the generator plugin.

Thin wrappers over ``protobuild.core.use_cases.status``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group("plugin")
def plugin() -> None:
    """Plugin — generator plugin lookup and version."""


@plugin.command("status")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show where the plugin is and whether its version matches."""
    from protobuild.core.use_cases.status import plugin_status

    result = plugin_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if result.path is None:
        click.secho(f"   {result.plugin}: not installed (config: ~> {result.required})", fg="yellow")
        return

    if result.compatible:
        color = "green"
    elif result.compatible is None:
        color = "yellow"
    else:
        color = "red"
    version = result.version or "unknown version"
    click.secho(f"   {result.plugin}={version} (config: ~> {result.required})", fg=color)
    click.echo(f"   → {result.path}")
