"""
Build configuration models — loaded from protobuild.yml.

``BuildConfig`` is the file as written. ``Options`` and
``ToolchainConfig`` are the resolved, immutable values a single build
run works from; they are read once and never mutated.
"""

from __future__ import annotations

import os
import re
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VersionPolicy(StrEnum):
    """What to do when the installed plugin does not match the constraint."""

    AUTO_INSTALL = "auto_install"
    WARN = "warn"
    FAIL = "fail"


def _default_install_dir() -> str:
    mix_home = os.environ.get("MIX_HOME") or str(Path.home() / ".mix")
    return str(Path(mix_home) / "escripts")


class Options(BaseModel):
    """Generator options for one build run.

    ``dest`` is always set by the time an ``Options`` exists; the
    loader falls back to the first build source directory.
    """

    model_config = ConfigDict(frozen=True)

    paths: tuple[str, ...] = ()
    sources: tuple[str, ...] = ()
    dest: str
    includes: tuple[str, ...] = ()
    plugins: tuple[str, ...] = ()
    gen_descriptors: bool = False
    package_prefix: str | None = None
    transform_module: str | None = None
    one_file_per_module: bool = False

    @field_validator("dest")
    @classmethod
    def _dest_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("dest must not be empty")
        return value

    @field_validator("transform_module")
    @classmethod
    def _qualified_module(cls, value: str | None) -> str | None:
        # Accept both "Foo.Bar" and the runtime form "Elixir.Foo.Bar"
        if value and value.startswith("Elixir."):
            return value[len("Elixir."):]
        return value or None


class ToolchainConfig(BaseModel):
    """External executables and the plugin provisioning policy."""

    model_config = ConfigDict(frozen=True)

    generator: str = "protoc"
    plugin: str = "protoc-gen-elixir"
    plugin_package: str = "protobuf"
    plugin_version: str = "0.11"
    version_policy: VersionPolicy = VersionPolicy.WARN
    install_command: tuple[str, ...] = (
        "mix", "escript.install", "hex", "{package}", "~> {version}", "--force",
    )
    install_dir: str = Field(default_factory=_default_install_dir)
    output_flag: str | None = None
    output_pattern: str = "**/*.pb.ex"
    required_executables: tuple[str, ...] = ()

    @field_validator("plugin_version")
    @classmethod
    def _plain_version(cls, value: str) -> str:
        value = value.strip().removeprefix("~>").removeprefix("~=").strip()
        if not re.fullmatch(r"\d+\.\d+(\.\d+)?", value):
            raise ValueError(f"plugin_version must look like 0.11 or 0.11.0, got {value!r}")
        return value

    @property
    def out_flag(self) -> str:
        """The generator output flag, e.g. ``--elixir_out``.

        protoc maps ``--X_out`` to the plugin ``protoc-gen-X``.
        """
        if self.output_flag:
            return self.output_flag
        prefix = "protoc-gen-"
        if self.plugin.startswith(prefix):
            return f"--{self.plugin[len(prefix):]}_out"
        return "--out"

    def installer_argv(self) -> list[str]:
        """Installer command with package and version filled in."""
        return [
            part.format(package=self.plugin_package, version=self.plugin_version)
            for part in self.install_command
        ]


class ProtocSettings(BaseModel):
    """The ``protoc:`` section of protobuild.yml, before defaulting."""

    paths: list[str] | None = None
    sources: list[str] = Field(default_factory=list)
    dest: str | None = None
    includes: list[str] = Field(default_factory=list)
    plugins: list[str] = Field(default_factory=list)
    gen_descriptors: bool = False
    package_prefix: str | None = None
    transform_module: str | None = None
    one_file_per_module: bool = False


class BuildConfig(BaseModel):
    """Root configuration — loaded from protobuild.yml."""

    version: int = 1

    source_dirs: list[str] = Field(default_factory=lambda: ["lib"])
    build_dir: str = "_build"

    protoc: ProtocSettings = Field(default_factory=ProtocSettings)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
