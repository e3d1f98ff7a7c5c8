"""
Status use case — what the last build recorded and which plugin is in use.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from protobuild.adapters.base import CommandRunner
from protobuild.adapters.shell.command import SubprocessRunner
from protobuild.core.config.loader import ConfigError
from protobuild.core.models.manifest import Manifest
from protobuild.core.persistence.manifest_file import load_manifest
from protobuild.core.services.plugin import is_compatible, probe_plugin


@dataclass
class ManifestStatus:
    manifest: Manifest | None = None
    manifest_file: Path | None = None
    exists: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        assert self.manifest is not None
        return {
            "path": str(self.manifest_file),
            "exists": self.exists,
            "sources": sorted(self.manifest.sources),
            "targets": sorted(self.manifest.targets),
        }


@dataclass
class PluginReport:
    plugin: str = ""
    required: str = ""
    status: str = ""
    path: str | None = None
    version: str | None = None
    compatible: bool | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "plugin": self.plugin,
            "required": self.required,
            "status": self.status,
            "path": self.path,
            "version": self.version,
            "compatible": self.compatible,
        }


def manifest_status(config_path: Path | None = None) -> ManifestStatus:
    """Load the manifest of the configured project."""
    from protobuild.core.use_cases.build import load_context

    try:
        ctx = load_context(config_path)
    except ConfigError as e:
        return ManifestStatus(error=str(e))

    return ManifestStatus(
        manifest=load_manifest(ctx.manifest_file),
        manifest_file=ctx.manifest_file,
        exists=ctx.manifest_file.is_file(),
    )


def plugin_status(
    config_path: Path | None = None,
    runner: CommandRunner | None = None,
) -> PluginReport:
    """Probe the plugin without installing anything."""
    from protobuild.core.use_cases.build import load_context

    try:
        ctx = load_context(config_path)
    except ConfigError as e:
        return PluginReport(error=str(e))

    toolchain = ctx.config.toolchain
    probe = probe_plugin(runner or SubprocessRunner(), toolchain.plugin)
    return PluginReport(
        plugin=toolchain.plugin,
        required=toolchain.plugin_version,
        status=str(probe.status),
        path=probe.path,
        version=probe.version,
        compatible=is_compatible(probe.version, toolchain.plugin_version) if probe.version else None,
    )
