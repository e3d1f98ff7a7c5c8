"""
Command and Receipt models — the execution contract.

Commands represent requested external process invocations. Receipts
represent results. This is the I/O contract between the build core and
the command runner: the core sends Commands, the runner returns
Receipts. Never exceptions.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class Command(BaseModel):
    """An external process invocation.

    ``env`` holds overrides only; the runner merges them over the
    current process environment.
    """

    argv: list[str]
    env: dict[str, str] = Field(default_factory=dict)
    cwd: str | None = None

    @property
    def executable(self) -> str:
        """The program being invoked (first argv element)."""
        return self.argv[0] if self.argv else ""

    @property
    def display(self) -> str:
        """Command line for logs and operator messages."""
        return " ".join(self.argv)


class Receipt(BaseModel):
    """Result of a command execution.

    Receipts capture the full outcome of a command. The runner
    NEVER raises exceptions — failures are captured here.
    """

    runner: str
    command: str
    status: Literal["ok", "failed"] = "ok"

    duration_ms: int = 0

    return_code: int | None = None
    output: str = ""
    error: str | None = None
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed or could not be started."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        runner: str,
        command: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        kwargs.setdefault("return_code", 0)
        return cls(
            runner=runner,
            command=command,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        runner: str,
        command: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            runner=runner,
            command=command,
            status="failed",
            error=error,
            **kwargs,
        )
