"""
Filesystem operations — relocation and removal of generated files.

Moves must survive the staging directory and the destination living on
different filesystems: ``os.replace`` fails with EXDEV there, and the
move falls back to copy-then-delete.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def move_file(src: Path, dst: Path) -> None:
    """Move ``src`` to ``dst``, creating parent directories.

    Raises:
        OSError: For any failure other than a cross-device rename.
    """
    dst.parent.mkdir(parents=True, exist_ok=True)
    try:
        os.replace(src, dst)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        logger.debug("Cross-device move %s -> %s, copying", src, dst)
        _xfs_move(src, dst)


def _xfs_move(src: Path, dst: Path) -> None:
    shutil.copy2(src, dst)
    os.remove(src)


def remove_file(path: Path) -> bool:
    """Delete a file if it exists.

    Returns:
        True if a file was removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed %s", path)
    return True


def collect_files(root: Path, pattern: str) -> list[Path]:
    """Files under ``root`` matching a glob pattern, sorted."""
    return sorted(p for p in root.glob(pattern) if p.is_file())
