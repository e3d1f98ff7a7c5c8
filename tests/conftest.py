"""
Shared test fixtures and configuration.
"""

import os
import textwrap
import time
from pathlib import Path

import pytest

from protobuild.adapters.mock import MockRunner
from protobuild.core.models.action import Command, Receipt


def _fake_protoc(out_flag: str = "--elixir_out", suffix: str = ".pb.ex"):
    """A MockRunner handler that behaves like protoc + plugin.

    Writes ``<stem><suffix>`` for every source into the directory named
    by the output flag, mirroring each source's parent directory name.
    """

    def handler(command: Command) -> Receipt:
        value = next(a for a in command.argv if a.startswith(out_flag + "="))
        out_dir = Path(value.split("=", 1)[1].rsplit(":", 1)[-1])
        for source in (a for a in command.argv[1:] if a.endswith(".proto")):
            src = Path(source)
            target = out_dir / src.parent.name / (src.stem + suffix)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"# generated from {src.name}\n")
        return Receipt.success(runner="mock", command=command.display)

    return handler


@pytest.fixture
def fake_protoc():
    """Factory for protoc-like MockRunner handlers."""
    return _fake_protoc


@pytest.fixture
def mock_runner() -> MockRunner:
    """Runner with protoc and a compatible plugin on the path."""
    runner = MockRunner(
        executables={
            "protoc": "/usr/bin/protoc",
            "protoc-gen-elixir": "/usr/local/bin/protoc-gen-elixir",
            "mix": "/usr/bin/mix",
        },
    )
    runner.set_output("protoc-gen-elixir", "0.11.0")
    runner.set_response("protoc", _fake_protoc())
    return runner


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory: write protobuild.yml and .proto files, back-dated.

    Everything is given an mtime in the past so a build run right after
    is strictly newer than its inputs.
    """

    def _make(config: str = "", protos: dict[str, str] | None = None) -> Path:
        cfg = tmp_path / "protobuild.yml"
        cfg.write_text(textwrap.dedent(config))
        past = time.time() - 100
        for rel, content in (protos or {"proto/a.proto": 'syntax = "proto3";\n'}).items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
            os.utime(path, (past, past))
        os.utime(cfg, (past, past))
        return cfg

    return _make
