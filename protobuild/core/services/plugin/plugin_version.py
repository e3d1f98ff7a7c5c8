"""
L3 Detection — Plugin lookup and version query.

Read-only probes: finds the plugin on the search path and runs
``<plugin> --version``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from protobuild.adapters.base import CommandRunner
from protobuild.core.models.action import Command
from protobuild.core.services.plugin.version_constraint import parse_version

logger = logging.getLogger(__name__)

VERSION_FLAG = "--version"


class PluginStatus(StrEnum):
    """What a probe found."""

    ABSENT = "absent"
    UNKNOWN_VERSION = "present-unknown-version"
    VERSIONED = "present-versioned"


@dataclass
class PluginProbe:
    """Result of looking for the plugin."""

    status: PluginStatus
    path: str | None = None
    version: str | None = None


def query_version(
    runner: CommandRunner,
    path: str,
    env: dict[str, str] | None = None,
) -> str | None:
    """Run the plugin's version query.

    Returns:
        The parsed version, or None on a non-zero exit or unparsable
        output.
    """
    receipt = runner.run(Command(argv=[path, VERSION_FLAG], env=dict(env or {})))
    if not receipt.ok:
        logger.debug("%s %s failed: %s", path, VERSION_FLAG, receipt.error)
        return None
    return parse_version(receipt.output)


def probe_plugin(
    runner: CommandRunner,
    plugin: str,
    env: dict[str, str] | None = None,
) -> PluginProbe:
    """Locate the plugin and determine its version."""
    path = runner.which(plugin, env)
    if path is None:
        return PluginProbe(status=PluginStatus.ABSENT)

    version = query_version(runner, path, env)
    if version is None:
        return PluginProbe(status=PluginStatus.UNKNOWN_VERSION, path=path)
    return PluginProbe(status=PluginStatus.VERSIONED, path=path, version=version)
