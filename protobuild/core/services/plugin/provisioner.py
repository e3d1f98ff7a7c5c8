"""
L5 Orchestration — Make sure the generator plugin is usable.

State machine over what ``probe_plugin`` finds:

    absent                    install the required version, prepend
                              the install dir to PATH for this run
    present-unknown-version   warn and proceed; the operator manages it
    present-versioned         compare with the constraint, then apply
                              the version policy on mismatch

Version policy on mismatch:
    warn          warning only (default)
    fail          PluginVersionMismatch error
    auto_install  install the required version over it
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from protobuild.adapters.base import CommandRunner
from protobuild.core.errors import MissingExecutable, PluginInstallFailed, PluginVersionMismatch
from protobuild.core.models.action import Command
from protobuild.core.models.options import ToolchainConfig, VersionPolicy
from protobuild.core.models.state import RunState
from protobuild.core.services.plugin.plugin_version import (
    PluginStatus,
    probe_plugin,
    query_version,
)
from protobuild.core.services.plugin.version_constraint import is_compatible

logger = logging.getLogger(__name__)


def ensure_plugin(
    state: RunState,
    runner: CommandRunner,
    toolchain: ToolchainConfig,
) -> RunState:
    """Resolve the plugin and record its version in the run state."""
    plugin = toolchain.plugin
    required = toolchain.plugin_version
    probe = probe_plugin(runner, plugin, state.env or None)

    if probe.status is PluginStatus.ABSENT:
        logger.info("%s not found, installing %s", plugin, required)
        return install_plugin(state, runner, toolchain)

    if probe.status is PluginStatus.UNKNOWN_VERSION:
        state.warn(
            f"Found plugin `{plugin}` at {probe.path} but could not determine "
            f"its version (config: ~> {required})"
        )
        return state

    assert probe.version is not None
    state.plugin_version = probe.version

    if is_compatible(probe.version, required):
        logger.debug("Using %s=%s at %s", plugin, probe.version, probe.path)
        return state

    if toolchain.version_policy is VersionPolicy.FAIL:
        state.add_error(PluginVersionMismatch(plugin, probe.version, required))
    elif toolchain.version_policy is VersionPolicy.AUTO_INSTALL:
        logger.info("Replacing %s=%s with %s", plugin, probe.version, required)
        install_plugin(state, runner, toolchain)
    else:
        state.warn(f"Found plugin `{plugin}={probe.version}` (config: ~> {required})")
    return state


def install_plugin(
    state: RunState,
    runner: CommandRunner,
    toolchain: ToolchainConfig,
) -> RunState:
    """Install the required plugin version into ``install_dir``.

    On success every later command of this run sees ``install_dir``
    first on its PATH.
    """
    argv = toolchain.installer_argv()
    if not argv or runner.which(argv[0], state.env or None) is None:
        state.add_error(MissingExecutable(argv[0] if argv else "<installer>"))
        return state

    receipt = runner.run(Command(argv=argv, env=dict(state.env)))
    if not receipt.ok:
        state.add_error(PluginInstallFailed(toolchain.plugin, receipt.error or ""))
        return state

    install_dir = toolchain.install_dir
    current_path = state.env.get("PATH", os.environ.get("PATH", ""))
    state.env["PATH"] = os.pathsep.join(p for p in (install_dir, current_path) if p)

    installed = str(Path(install_dir) / toolchain.plugin)
    version = query_version(runner, installed, state.env)
    state.plugin_version = version or toolchain.plugin_version

    logger.info("[protoc] %s (= %s)", installed, state.plugin_version)
    return state
