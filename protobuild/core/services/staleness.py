"""
Staleness evaluation — does this build need to run at all?

Two questions, answered from file modification times:

    forced  the configuration changed since the manifest was written,
            so every output the manifest claims is suspect
    stale   some source is newer than some target, a target is
            missing, or the source set itself changed
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from protobuild.core.models.manifest import Manifest

logger = logging.getLogger(__name__)


def _mtime(path: str | Path) -> float:
    """Modification time, 0 for a missing file."""
    try:
        return Path(path).stat().st_mtime
    except OSError:
        return 0.0


def is_forced(config_path: Path, manifest_file: Path) -> bool:
    """Whether the config is newer than the manifest.

    A missing manifest counts as infinitely old.
    """
    forced = _mtime(config_path) > _mtime(manifest_file)
    if forced:
        logger.debug("Config %s is newer than %s", config_path, manifest_file)
    return forced


def is_stale(sources: Iterable[str], targets: Iterable[str]) -> bool:
    """Whether any source is newer than the oldest target.

    Missing targets have mtime 0, so any missing target makes every
    existing source newer than it. With no targets at all, any
    source makes the build stale; with no sources nothing is.
    """
    oldest_target = min((_mtime(t) for t in targets), default=0.0)
    return any(_mtime(s) > oldest_target for s in sources)


def needs_generation(sources: list[str], manifest: Manifest) -> bool:
    """Whether the recorded targets are out of date for these sources."""
    if not sources:
        return False
    if set(sources) != manifest.sources:
        logger.debug("Source set changed since last build")
        return True
    return is_stale(sources, manifest.targets)
