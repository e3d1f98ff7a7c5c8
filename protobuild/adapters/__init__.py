"""Adapters — bindings to external processes and the filesystem.

Public re-exports for convenient access.
"""

from protobuild.adapters.base import CommandRunner
from protobuild.adapters.mock import MockRunner
from protobuild.adapters.shell.command import SubprocessRunner

__all__ = [
    "CommandRunner",
    "MockRunner",
    "SubprocessRunner",
]
