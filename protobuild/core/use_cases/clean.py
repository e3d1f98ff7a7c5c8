"""
Clean use case — delete everything the manifest says was generated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from protobuild.adapters.shell.filesystem import remove_file
from protobuild.core.config.loader import ConfigError
from protobuild.core.models.manifest import Manifest
from protobuild.core.persistence.manifest_file import load_manifest

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    removed: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"removed": list(self.removed)}


def clean_targets(manifest: Manifest) -> list[str]:
    """Remove every recorded target; returns the paths that existed."""
    removed = []
    for target in sorted(manifest.targets):
        if remove_file(Path(target)):
            logger.info("%s", target)
            removed.append(target)
    return removed


def run_clean(config_path: Path | None = None) -> CleanResult:
    """Remove generated files and the manifest itself."""
    from protobuild.core.use_cases.build import load_context

    result = CleanResult()
    try:
        ctx = load_context(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.removed = clean_targets(load_manifest(ctx.manifest_file))
    remove_file(ctx.manifest_file)
    return result
