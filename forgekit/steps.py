"""Steps and the side-effecting operations they are made of.

A ``Step`` is what the progress bar counts: a label, a failure message and an
ordered list of operations.  Operations are the individual side effects (run
a shell command or write a file).  Every operation returns a
``StepResult`` rather than raising, so a failure can travel up to the single
top-level handler.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from forgekit.models import ErrorKind, StepResult
from forgekit.utils import print_command, run_command, write_text_file


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class Operation(ABC):
    """A single side effect inside a step."""

    @abstractmethod
    async def run(self, *, verbose: bool = False) -> StepResult:
        """Perform the side effect and report its outcome."""


@dataclass
class RunCommand(Operation):
    """Run *command* through the host shell, streaming its output."""

    command: str
    cwd: Path | None = None
    timeout: float | None = None

    async def run(self, *, verbose: bool = False) -> StepResult:
        if verbose:
            print_command(self.command, self.cwd)
        try:
            returncode, _, _ = await run_command(
                self.command, cwd=self.cwd, timeout=self.timeout
            )
        except OSError as exc:
            return StepResult.failure(
                ErrorKind.PROCESS_LAUNCH, f"Failed to execute command: {exc}"
            )
        if returncode != 0:
            return StepResult.failure(
                ErrorKind.PROCESS_EXIT,
                f"Command exited with status: {returncode}",
                exit_code=returncode,
            )
        return StepResult.success()


@dataclass
class WriteFile(Operation):
    """Write fixed *content* to *path*, creating parent directories."""

    path: Path
    content: str

    async def run(self, *, verbose: bool = False) -> StepResult:
        try:
            await asyncio.to_thread(write_text_file, self.path, self.content)
        except OSError as exc:
            return StepResult.failure(
                ErrorKind.FILE_WRITE, f"Failed to write {self.path}: {exc}"
            )
        return StepResult.success()


# ---------------------------------------------------------------------------
# Step
# ---------------------------------------------------------------------------


@dataclass
class Step:
    """A labelled unit of work counted by the progress bar.

    Attributes:
        label: Text shown while the step runs.
        operations: Side effects, run in order; the first failure ends the step.
        failure_message: Context prefixed to the cause when the step fails.
    """

    label: str
    operations: list[Operation] = field(default_factory=list)
    failure_message: str = "Step failed."

    async def run(self, *, verbose: bool = False) -> StepResult:
        for operation in self.operations:
            result = await operation.run(verbose=verbose)
            if not result.ok:
                return result.with_context(self.failure_message.rstrip("."))
        return StepResult.success()
