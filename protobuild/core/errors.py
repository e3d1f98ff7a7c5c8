"""
Build errors — the failure kinds a build run can record.

These are exceptions so they carry a type and a message, but the
orchestrator never raises them: each stage appends instances to
``RunState.errors`` and the run fails if that list is non-empty.
"""

from __future__ import annotations


class BuildError(Exception):
    """Base class for every error recorded during a build run."""


class MissingExecutable(BuildError):
    """A required executable is not on the search path."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"Missing executable: {executable}")


class MissingSource(BuildError):
    """An explicitly configured source file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Missing source: {path}")


class SourceExtensionMismatch(BuildError):
    """An explicitly configured source is not a .proto file."""

    def __init__(self, path: str, extension: str):
        self.path = path
        self.extension = extension
        super().__init__(f"Source {path} does not have the {extension} extension")


class PluginVersionMismatch(BuildError):
    """The installed plugin does not satisfy the required version."""

    def __init__(self, plugin: str, found: str, required: str):
        self.plugin = plugin
        self.found = found
        self.required = required
        super().__init__(
            f"Plugin version mismatch: found `{plugin}={found}` (config: ~> {required})"
        )


class PluginInstallFailed(BuildError):
    """The plugin installer exited with a non-zero status."""

    def __init__(self, plugin: str, detail: str = ""):
        self.plugin = plugin
        self.detail = detail
        message = f"Failed to install {plugin}"
        super().__init__(f"{message}: {detail}" if detail else message)


class GenerationFailed(BuildError):
    """The generator exited with a non-zero status."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__("Compilation failed")


class RelocationFailed(BuildError):
    """A generated file could not be moved into the destination tree."""

    def __init__(self, src: str, dst: str, detail: str = ""):
        self.src = src
        self.dst = dst
        self.detail = detail
        super().__init__(f"Cannot move {src} to {dst}: {detail}")
