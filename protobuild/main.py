"""
protobuild — CLI entrypoint.

Usage:
    python -m protobuild.main --help
    python -m protobuild.main build
    python -m protobuild.main clean
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from protobuild import __version__
from protobuild.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="protobuild")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to protobuild.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """protobuild — compile .proto files, only when they changed."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PROTOBUILD_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("PROTOBUILD_LOG_FILE"),
        log_file_level=os.environ.get("PROTOBUILD_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--force", "-f", is_flag=True, help="Clean and regenerate everything.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build(ctx: click.Context, force: bool, as_json: bool) -> None:
    """Compile .proto sources into the destination directory.

    Warnings and errors are reported on stderr by the logging setup;
    stdout carries only the outcome.
    """
    from protobuild.core.use_cases.build import run_build

    result = run_build(config_path=ctx.obj.get("config_path"), force=force)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if not result.ok:
        sys.exit(1)

    state = result.state
    assert state is not None
    if ctx.obj.get("quiet", False):
        return

    for target in state.cleaned:
        click.echo(f"compile.clean {target}")
    if state.generated:
        click.secho(
            f"compile.proto {len(state.sources)} source(s) → "
            f"{len(state.manifest.targets)} file(s)",
            fg="green",
        )
    else:
        click.echo("compile.proto up to date")


@cli.command()
@click.pass_context
def clean(ctx: click.Context) -> None:
    """Delete every generated file recorded in the manifest."""
    from protobuild.core.use_cases.clean import run_clean

    result = run_clean(config_path=ctx.obj.get("config_path"))
    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    for path in result.removed:
        click.echo(f"compile.clean {path}")


# ── Sub-command groups ──────────────────────────────────────────

from protobuild.ui.cli.manifest import manifest  # noqa: E402
from protobuild.ui.cli.plugin import plugin  # noqa: E402

cli.add_command(manifest)
cli.add_command(plugin)


if __name__ == "__main__":
    cli()
