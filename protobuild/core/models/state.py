"""
RunState — the transient aggregate threaded through one build run.

Every stage of the orchestrator reads and extends the same RunState.
Nothing here is persisted; the manifest is saved separately once a
generation pass succeeds.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from protobuild.core.errors import BuildError
from protobuild.core.models.manifest import Manifest
from protobuild.core.models.options import Options


@dataclass
class RunState:
    """Accumulated state of a build run.

    A non-empty ``errors`` list means the run has failed; later stages
    that would touch the generator or the destination tree skip.
    """

    options: Options
    manifest: Manifest = field(default_factory=Manifest)
    errors: list[BuildError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)
    force: bool = False
    plugin_version: str | None = None

    # ── Outcome bookkeeping ──────────────────────────────────────
    generated: bool = False
    cleaned: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, error: BuildError) -> None:
        self.errors.append(error)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    @property
    def error_messages(self) -> list[str]:
        """Human-readable messages in the order they were recorded."""
        return [str(e) for e in self.errors]
