"""
Domain models — Pydantic types for the build step.

All models are re-exported here for convenient access:

    from protobuild.core.models import Options, Manifest, RunState, Receipt
"""

from protobuild.core.models.action import Command, Receipt
from protobuild.core.models.manifest import Manifest
from protobuild.core.models.options import (
    BuildConfig,
    Options,
    ProtocSettings,
    ToolchainConfig,
    VersionPolicy,
)
from protobuild.core.models.state import RunState

__all__ = [
    # options.py
    "BuildConfig",
    # action.py
    "Command",
    # manifest.py
    "Manifest",
    "Options",
    "ProtocSettings",
    "Receipt",
    # state.py
    "RunState",
    "ToolchainConfig",
    "VersionPolicy",
]
