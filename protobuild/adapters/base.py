"""
Runner base — the protocol contract between the build core and
external processes.

This defines the narrow capability every command runner must
implement: find an executable and run a command. The build core only
talks to external tools through this protocol, never directly through
``subprocess``, so its decision logic is testable without spawning
real processes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from protobuild.core.models.action import Command, Receipt


class CommandRunner(ABC):
    """Abstract base class for command runners.

    Runners perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'subprocess', 'mock')."""

    @abstractmethod
    def which(self, executable: str, env: dict[str, str] | None = None) -> str | None:
        """Locate an executable.

        Args:
            executable: Program name or path.
            env: Environment overrides; a ``PATH`` entry replaces the
                process search path for this lookup.

        Returns:
            Absolute path to the executable, or None if not found.
        """

    @abstractmethod
    def run(self, command: Command) -> Receipt:
        """Run the command to completion and return a receipt.

        MUST never raise exceptions. A non-zero exit status or a
        command that cannot be started yields status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
