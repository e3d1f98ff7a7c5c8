"""
Configuration loader — reads protobuild.yml into build models.

Reads YAML, validates it against the Pydantic schemas and resolves the
per-run ``Options``: defaults are filled in from the build source
directories and every path is anchored at the project root.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from protobuild.core.models.options import BuildConfig, Options

logger = logging.getLogger(__name__)

CONFIG_FILE = "protobuild.yml"

# Build metadata lives here, relative to build_dir
METADATA_DIR = "protobuild"


class ConfigError(Exception):
    """Raised when the build configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for protobuild.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to protobuild.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> BuildConfig:
    """Load and validate the build configuration.

    Args:
        path: Explicit path to protobuild.yml. If None, searches upward.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Create one, or specify --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid all-defaults config
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        return BuildConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid build configuration: {e}") from e


def project_root(config_path: Path) -> Path:
    """Get the project root directory from a config file path."""
    return config_path.parent.resolve()


def metadata_dir(config: BuildConfig, root: Path) -> Path:
    """Directory holding the manifest and staging directories."""
    return _anchor(root, config.build_dir) / METADATA_DIR


def resolve_options(config: BuildConfig, root: Path) -> Options:
    """Fill in defaults and anchor every path at the project root.

    ``paths`` defaults to the build source directories and ``dest`` to
    the first of them.

    Raises:
        ConfigError: If no destination can be derived.
    """
    protoc = config.protoc

    paths = protoc.paths if protoc.paths is not None else config.source_dirs
    dest = protoc.dest or (config.source_dirs[0] if config.source_dirs else None)
    if not dest:
        raise ConfigError("No destination: set protoc.dest or source_dirs")

    try:
        return Options(
            paths=tuple(str(_anchor(root, p)) for p in paths),
            sources=tuple(str(_anchor(root, p)) for p in protoc.sources),
            dest=str(_anchor(root, dest)),
            includes=tuple(str(_anchor(root, p)) for p in protoc.includes),
            plugins=tuple(protoc.plugins),
            gen_descriptors=protoc.gen_descriptors,
            package_prefix=protoc.package_prefix,
            transform_module=protoc.transform_module,
            one_file_per_module=protoc.one_file_per_module,
        )
    except ValueError as e:
        raise ConfigError(f"Invalid protoc options: {e}") from e


def _anchor(root: Path, path: str) -> Path:
    p = Path(path)
    return p if p.is_absolute() else root / p
