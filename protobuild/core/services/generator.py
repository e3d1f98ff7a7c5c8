"""
Generator invocation — protoc command line, staged run, relocation.

The generator never writes into the destination tree directly. Each
invocation gets its own staging directory; only after protoc exits 0
are the generated files moved into place, so a failed run leaves the
destination exactly as it was. The staging directory is removed on
every exit path.

Output flag value, with options in this fixed order:

    plugins=grpc+foo,gen_descriptors=true,package_prefix=p,
    transform_module=M,one_file_per_module=true:<out_dir>

or just ``<out_dir>`` when no option is set.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from protobuild.adapters.base import CommandRunner
from protobuild.adapters.shell.filesystem import collect_files, move_file
from protobuild.core.errors import GenerationFailed, RelocationFailed
from protobuild.core.models.action import Command
from protobuild.core.models.manifest import Manifest
from protobuild.core.models.options import Options, ToolchainConfig
from protobuild.core.models.state import RunState

logger = logging.getLogger(__name__)


def build_out_options(options: Options) -> list[str]:
    """Generator options derived from the build options, in flag order."""
    out: list[str] = []
    if options.plugins:
        out.append("plugins=" + "+".join(options.plugins))
    if options.gen_descriptors:
        out.append("gen_descriptors=true")
    if options.package_prefix:
        out.append(f"package_prefix={options.package_prefix}")
    if options.transform_module:
        out.append(f"transform_module={options.transform_module}")
    if options.one_file_per_module:
        out.append("one_file_per_module=true")
    return out


def build_out_value(options: Options, out_dir: str) -> str:
    """Value of the generator output flag."""
    out_opts = build_out_options(options)
    if not out_opts:
        return out_dir
    return ",".join(out_opts) + ":" + out_dir


def build_include_args(options: Options, sources: list[str]) -> list[str]:
    """One ``-I`` per distinct source directory, then configured includes."""
    dirs = [os.path.dirname(s) for s in sources if os.path.dirname(s)]
    includes = dict.fromkeys([*dirs, *options.includes])
    return [f"-I{d}" for d in includes]


def build_generator_args(
    options: Options,
    sources: list[str],
    out_dir: str,
    out_flag: str = "--out",
) -> list[str]:
    """Full generator argument list (without the executable).

    ``-I<dir>... <out_flag>=<value> <source>...``
    """
    return [
        *build_include_args(options, sources),
        f"{out_flag}={build_out_value(options, out_dir)}",
        *sources,
    ]


def invoke_generator(
    state: RunState,
    runner: CommandRunner,
    toolchain: ToolchainConfig,
    staging_root: Path,
) -> RunState:
    """Run the generator over ``state.sources`` and relocate its output.

    On success the state's manifest records exactly the sources passed
    in and the destination paths of every relocated file. On failure an
    error is recorded and the destination is left untouched.
    """
    sources = state.sources
    dest = Path(state.options.dest)
    logger.info("Compiling %d file(s): %s", len(sources), " ".join(sources))

    staging_root.mkdir(parents=True, exist_ok=True)
    dest.mkdir(parents=True, exist_ok=True)

    with tempfile.TemporaryDirectory(prefix="protoc-", dir=staging_root) as tmp:
        tmpdir = Path(tmp)
        args = build_generator_args(state.options, sources, tmp, toolchain.out_flag)
        command = Command(argv=[toolchain.generator, *args], env=dict(state.env))

        receipt = runner.run(command)
        if not receipt.ok:
            logger.error("%s failed: %s", toolchain.generator, receipt.error)
            state.add_error(GenerationFailed(receipt.error or ""))
            return state
        if receipt.stderr:
            logger.warning("%s: %s", toolchain.generator, receipt.stderr)

        generated = collect_files(tmpdir, toolchain.output_pattern)
        targets: set[str] = set()
        for path in generated:
            target = dest / path.relative_to(tmpdir)
            try:
                move_file(path, target)
            except OSError as e:
                state.add_error(RelocationFailed(str(path), str(target), str(e)))
                return state
            targets.add(str(target))

    logger.info(
        "Generated %d file(s) into %s in %d ms", len(targets), dest, receipt.duration_ms,
    )
    state.manifest = Manifest(sources=set(sources), targets=targets)
    state.generated = True
    return state
