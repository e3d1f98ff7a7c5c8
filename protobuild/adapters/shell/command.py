"""
Subprocess runner — execute external commands for real.

The SINGLE PLACE where ``subprocess.run`` is called. No timeout is
applied: a hung generator hangs the build, the same as running it by
hand would.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time

from protobuild.adapters.base import CommandRunner
from protobuild.core.models.action import Command, Receipt

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Run commands with ``subprocess.run`` and capture their output."""

    @property
    def name(self) -> str:
        return "subprocess"

    def which(self, executable: str, env: dict[str, str] | None = None) -> str | None:
        search_path = (env or {}).get("PATH")
        return shutil.which(executable, path=search_path)

    def run(self, command: Command) -> Receipt:
        env = os.environ.copy()
        env.update(command.env)

        logger.debug("Executing: %s (cwd=%s)", command.display, command.cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(
                command.argv,
                cwd=command.cwd,
                env=env,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            return Receipt.failure(
                runner=self.name,
                command=command.display,
                error=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                runner=self.name,
                command=command.display,
                output=output,
                duration_ms=elapsed_ms,
                stderr=stderr,
            )

        return Receipt.failure(
            runner=self.name,
            command=command.display,
            error=stderr or f"Command exited with code {result.returncode}",
            return_code=result.returncode,
            output=output,
            stderr=stderr,
            duration_ms=elapsed_ms,
        )
