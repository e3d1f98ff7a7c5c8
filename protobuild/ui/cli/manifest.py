"""
CLI commands for the build manifest.

Thin wrappers over ``protobuild.core.use_cases.status``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group("manifest")
def manifest() -> None:
    """Manifest — what the last build generated."""


@manifest.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the sources and targets recorded by the last build."""
    from protobuild.core.use_cases.status import manifest_status

    result = manifest_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if not result.exists:
        click.echo(f"No manifest at {result.manifest_file}")
        return

    data = result.to_dict()
    click.secho(f"📄 {data['path']}", fg="cyan", bold=True)
    click.secho(f"   Sources: {len(data['sources'])}", bold=True)
    for source in data["sources"]:
        click.echo(f"     • {source}")
    click.secho(f"   Targets: {len(data['targets'])}", bold=True)
    for target in data["targets"]:
        click.echo(f"     • {target}")
