"""
L1 Domain — Plugin version parsing and matching (pure).

No I/O, no subprocess.
"""

from __future__ import annotations

import re

_VERSION_RE = re.compile(r"v?(\d+\.\d+(?:\.\d+)?)")


def parse_version(output: str) -> str | None:
    """Extract the first semver-looking token from version output.

    ``"0.11.0"``, ``"protoc-gen-elixir 0.11.0"`` and ``"v0.11"`` all
    parse; anything without a dotted number does not.
    """
    match = _VERSION_RE.search(output or "")
    return match.group(1) if match else None


def _parse_semver(v: str) -> tuple[int, ...]:
    return tuple(int(x) for x in v.lstrip("v").split(".")[:3])


def _pad(parts: tuple[int, ...]) -> tuple[int, int, int]:
    major, minor, patch = (*parts, 0, 0)[:3]
    return major, minor, patch


def is_compatible(version: str, required: str) -> bool:
    """Compatible-release match (``~>`` / ``~=``).

    The last component of the requirement may float upward, the ones
    before it are pinned:

        ~> 0.11     >= 0.11.0 and < 1.0.0
        ~> 0.11.2   >= 0.11.2 and < 0.12.0

    Missing components count as zero, so ``0.11`` satisfies ``0.11.0``.
    """
    try:
        sel_parts = _parse_semver(version)
        ref_parts = _parse_semver(required)
    except ValueError:
        return False

    sel, ref = _pad(sel_parts), _pad(ref_parts)
    if sel < ref:
        return False
    pinned = 2 if len(ref_parts) >= 3 else 1
    return sel[:pinned] == ref[:pinned]
