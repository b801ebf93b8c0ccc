"""Preflight check for the external tools a command needs."""

from __future__ import annotations

import shutil
from collections.abc import Iterable

from forgekit.models import ErrorKind, StepResult
from forgekit.utils import run_command


async def check_dependencies(tools: Iterable[str]) -> StepResult:
    """Verify every tool in *tools* resolves on ``PATH`` and answers ``--version``.

    Stops at the first tool that is missing or cannot be launched and returns
    a ``missing_dependency`` failure naming it.  A tool whose version query
    exits non-zero still counts as present: it could be launched.
    """
    for tool in tools:
        resolved = shutil.which(tool)
        if resolved is None:
            return _missing(tool)
        try:
            await run_command([resolved, "--version"], capture=True, timeout=60)
        except OSError:
            return _missing(tool)
    return StepResult.success()


def _missing(tool: str) -> StepResult:
    return StepResult.failure(
        ErrorKind.MISSING_DEPENDENCY,
        f"Missing dependency: {tool}. Please install it.",
    )
