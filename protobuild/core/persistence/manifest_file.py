"""
Manifest persistence — versioned read/write of the build manifest.

The manifest is stored as gzip-compressed JSON under the build
metadata directory, tagged with its schema version:

    {"vsn": 2, "sources": [...], "targets": [...]}

Schema 1 recorded a mapping of source → targets; it is migrated to the
flat schema on load and never written again.

Loading fails soft: a missing or unreadable manifest only costs an
extra rebuild, so every problem yields an empty manifest.
"""

from __future__ import annotations

import gzip
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from protobuild.core.models.manifest import Manifest

logger = logging.getLogger(__name__)

MANIFEST_FILE = "compile.proto.manifest"
MANIFEST_VSN = 2


class _ManifestV1(BaseModel):
    vsn: Literal[1]
    data: dict[str, list[str]]

    def upgrade(self) -> Manifest:
        targets = {t for ts in self.data.values() for t in ts}
        return Manifest(sources=set(self.data), targets=targets)


class _ManifestV2(BaseModel):
    vsn: Literal[2]
    sources: list[str] = Field(default_factory=list)
    targets: list[str] = Field(default_factory=list)

    def upgrade(self) -> Manifest:
        return Manifest(sources=set(self.sources), targets=set(self.targets))


_ManifestFile = TypeAdapter(
    Annotated[_ManifestV1 | _ManifestV2, Field(discriminator="vsn")]
)


def manifest_path(metadata_dir: Path) -> Path:
    """Get the manifest file path inside a build metadata directory."""
    return metadata_dir / MANIFEST_FILE


def load_manifest(path: Path) -> Manifest:
    """Load the manifest, migrating older schemas.

    Returns:
        The recorded Manifest, or an empty one if the file is missing,
        corrupt or of an unknown schema.
    """
    if not path.is_file():
        logger.debug("No manifest at %s", path)
        return Manifest()

    try:
        raw = gzip.decompress(path.read_bytes())
        record = _ManifestFile.validate_json(raw)
    except Exception as e:
        logger.warning("Unreadable manifest %s: %s; treating as empty", path, e)
        return Manifest()

    if record.vsn != MANIFEST_VSN:
        logger.info("Migrating manifest %s from schema %d", path, record.vsn)
    return record.upgrade()


def save_manifest(path: Path, manifest: Manifest, timestamp: float) -> None:
    """Persist the manifest, or delete it if it records no targets.

    The file's mtime is set to ``timestamp`` (the logical build time)
    rather than the wall-clock write time, so that configuration edits
    made during a build still force the next one.

    Args:
        path: Manifest file path.
        manifest: The manifest to save.
        timestamp: POSIX time the build started.
    """
    if manifest.empty:
        if path.is_file():
            path.unlink()
            logger.debug("Removed empty manifest %s", path)
        return

    path.parent.mkdir(parents=True, exist_ok=True)

    record = {
        "vsn": MANIFEST_VSN,
        "sources": sorted(manifest.sources),
        "targets": sorted(manifest.targets),
    }
    data = gzip.compress(json.dumps(record).encode("utf-8"))

    # Atomic write: temp file in same directory, then rename
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".manifest_", suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise

    os.utime(path, (timestamp, timestamp))
    logger.debug("Manifest saved to %s (%d targets)", path, len(manifest.targets))
