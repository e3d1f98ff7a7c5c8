"""
Manifest model — what the last successful generation produced.

The manifest is the sole source of truth for which files to delete on
clean: every target was produced by a run whose inputs are exactly
``sources``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Manifest(BaseModel):
    """Source and target sets of the last successful run."""

    sources: set[str] = Field(default_factory=set)
    targets: set[str] = Field(default_factory=set)

    @property
    def empty(self) -> bool:
        return not self.targets
