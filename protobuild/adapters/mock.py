"""
Mock runner — test double for external processes.

Simulates the generator, plugin and installer without touching the
system. Executables are "installed" by registering a path; responses
are configured per executable name, either as a fixed Receipt or as a
handler that can also produce side effects (e.g. write generated files
into the output directory).
"""

from __future__ import annotations

import os
from collections.abc import Callable

from protobuild.adapters.base import CommandRunner
from protobuild.core.models.action import Command, Receipt

Handler = Callable[[Command], Receipt]


class MockRunner(CommandRunner):
    """Universal mock runner for testing.

    By default every command succeeds with ``default_output``.
    Responses are keyed by the executable's base name, so
    ``/usr/bin/protoc`` and ``protoc`` share one response.
    """

    def __init__(
        self,
        executables: dict[str, str] | None = None,
        default_output: str = "",
    ):
        self._executables: dict[str, str] = dict(executables or {})
        self._default_output = default_output
        self._responses: dict[str, Receipt | Handler] = {}
        self._call_log: list[Command] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[Command]:
        """Every command this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_for(self, executable: str) -> list[Command]:
        """Commands whose executable base name matches."""
        return [c for c in self._call_log if os.path.basename(c.executable) == executable]

    def add_executable(self, executable: str, path: str | None = None) -> None:
        """Make ``which`` find the executable."""
        self._executables[executable] = path or f"/usr/bin/{executable}"

    def remove_executable(self, executable: str) -> None:
        self._executables.pop(executable, None)

    def set_response(self, executable: str, response: Receipt | Handler) -> None:
        """Set a fixed receipt or a handler for an executable."""
        self._responses[executable] = response

    def set_output(self, executable: str, output: str) -> None:
        """Configure an executable to succeed with the given stdout."""
        self._responses[executable] = Receipt.success(
            runner=self.name, command=executable, output=output,
        )

    def set_failure(
        self,
        executable: str,
        error: str = "Mock failure",
        return_code: int = 1,
    ) -> None:
        """Configure an executable to exit non-zero."""
        self._responses[executable] = Receipt.failure(
            runner=self.name,
            command=executable,
            error=error,
            return_code=return_code,
        )

    def which(self, executable: str, env: dict[str, str] | None = None) -> str | None:
        return self._executables.get(os.path.basename(executable))

    def run(self, command: Command) -> Receipt:
        self._call_log.append(command)

        response = self._responses.get(os.path.basename(command.executable))
        if callable(response):
            return response(command)
        if response is not None:
            return response

        return Receipt.success(
            runner=self.name,
            command=command.display,
            output=self._default_output,
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
