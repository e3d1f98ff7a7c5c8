"""
Build use case — the incremental protoc build, end to end.

This is the top-level orchestrator. Stages run strictly in order over
one RunState:

    resolve options → force check → required executables → plugin
    → sources → staleness → generator → manifest

A missing required executable stops the run before anything touches
the plugin, the generator or the destination tree. Independent checks
(every required executable, every explicit source) all report before
the run stops.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from protobuild.adapters.base import CommandRunner
from protobuild.adapters.shell.command import SubprocessRunner
from protobuild.core.config.loader import (
    ConfigError,
    find_config_file,
    load_config,
    metadata_dir,
    project_root,
    resolve_options,
)
from protobuild.core.errors import MissingExecutable
from protobuild.core.models.manifest import Manifest
from protobuild.core.models.options import BuildConfig, Options
from protobuild.core.models.state import RunState
from protobuild.core.persistence.manifest_file import load_manifest, manifest_path, save_manifest
from protobuild.core.services.generator import invoke_generator
from protobuild.core.services.plugin import ensure_plugin
from protobuild.core.services.sources import resolve_sources, validate_sources
from protobuild.core.services.staleness import is_forced, needs_generation
from protobuild.core.use_cases.clean import clean_targets

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """Everything resolved from the config file before a run starts."""

    config_path: Path
    project_root: Path
    config: BuildConfig
    options: Options
    metadata_dir: Path

    @property
    def manifest_file(self) -> Path:
        return manifest_path(self.metadata_dir)


def load_context(config_path: Path | None = None) -> BuildContext:
    """Locate, load and resolve the build configuration.

    Raises:
        ConfigError: If no config is found or it is invalid.
    """
    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        raise ConfigError("No protobuild.yml found.")

    config = load_config(config_path)
    root = project_root(config_path)
    return BuildContext(
        config_path=config_path,
        project_root=root,
        config=config,
        options=resolve_options(config, root),
        metadata_dir=metadata_dir(config, root),
    )


@dataclass
class BuildResult:
    """Result of a build run."""

    state: RunState | None = None
    context: BuildContext | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def skipped(self) -> bool:
        """True when the run found nothing to regenerate."""
        return self.ok and self.state is not None and not self.state.generated

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.errors:
            result["errors"] = list(self.errors)
        if self.state is None:
            return result

        state = self.state
        result.update({
            "forced": state.force,
            "generated": state.generated,
            "plugin_version": state.plugin_version,
            "sources": list(state.sources),
            "targets": sorted(state.manifest.targets),
            "cleaned": list(state.cleaned),
            "warnings": list(state.warnings),
        })
        return result


def run_build(
    config_path: Path | None = None,
    runner: CommandRunner | None = None,
    force: bool = False,
) -> BuildResult:
    """Run the incremental build.

    Args:
        config_path: Optional explicit path to protobuild.yml.
        runner: Command runner for external processes (default: real
            subprocesses).
        force: Clean and regenerate even if nothing is stale.

    Returns:
        BuildResult; ``ok`` is True only if no stage recorded an error.
    """
    result = BuildResult()
    timestamp = time.time()

    try:
        ctx = load_context(config_path)
    except ConfigError as e:
        logger.error("%s", e)
        result.errors.append(str(e))
        return result

    result.context = ctx
    runner = runner or SubprocessRunner()
    toolchain = ctx.config.toolchain

    state = RunState(options=ctx.options, manifest=load_manifest(ctx.manifest_file))
    state.force = force or is_forced(ctx.config_path, ctx.manifest_file)
    result.state = state

    _check_executables(state, runner, [toolchain.generator, *toolchain.required_executables])

    if state.ok:
        ensure_plugin(state, runner, toolchain)
        for warning in state.warnings:
            logger.warning("%s", warning)

    # Source checks are independent of the plugin; only a missing tool stops them
    if not any(isinstance(e, MissingExecutable) for e in state.errors):
        state.sources = resolve_sources(ctx.options)
        for error in validate_sources(ctx.options):
            state.add_error(error)

    if state.ok:
        _compile(state, runner, ctx, timestamp)

    for error in state.errors:
        logger.error("%s", error)
    result.errors = state.error_messages
    return result


def _check_executables(state: RunState, runner: CommandRunner, executables: list[str]) -> None:
    for exe in executables:
        if runner.which(exe, state.env or None) is None:
            state.add_error(MissingExecutable(exe))


def _compile(state: RunState, runner: CommandRunner, ctx: BuildContext, timestamp: float) -> None:
    Path(state.options.dest).mkdir(parents=True, exist_ok=True)
    changed = False

    if state.force:
        state.cleaned = clean_targets(state.manifest)
        state.manifest = Manifest()
        changed = True

    if state.sources and (state.force or needs_generation(state.sources, state.manifest)):
        previous = state.manifest
        invoke_generator(state, runner, ctx.config.toolchain, ctx.metadata_dir)
        changed = changed or state.generated
        if state.generated:
            # Targets dropped from the manifest must not stay on disk
            orphans = Manifest(targets=previous.targets - state.manifest.targets)
            state.cleaned += clean_targets(orphans)
    else:
        logger.info("Nothing to compile")

    # A skipped run must leave the manifest and its mtime alone
    if changed and state.ok:
        save_manifest(ctx.manifest_file, state.manifest, timestamp)
