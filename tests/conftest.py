"""Shared pytest fixtures for the forgekit test suite.

Provides reusable fixtures for:
- A quiet ``Config`` (no progress bar)
- Temporary project roots
- Mocked subprocess execution for steps and the dependency check
- A recording fake operation for sequencing tests
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from forgekit.config import Config
from forgekit.models import ErrorKind, StepResult
from forgekit.steps import Operation


# ---------------------------------------------------------------------------
# Configuration & paths
# ---------------------------------------------------------------------------

@pytest.fixture
def quiet_config() -> Config:
    """Config with the progress bar disabled so output stays line-based."""
    return Config(show_progress=False)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory that generated projects are written into."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_step_commands():
    """Patch the command runner used by ``RunCommand`` to always succeed."""
    mock = AsyncMock(return_value=(0, "", ""))
    with patch("forgekit.steps.run_command", mock):
        yield mock


@pytest.fixture
def mock_tools_present():
    """Make every required tool resolve and answer ``--version``."""
    version = AsyncMock(return_value=(0, "10.0.0", ""))
    with patch("forgekit.dependencies.shutil.which", side_effect=lambda t: f"/usr/bin/{t}"), \
         patch("forgekit.dependencies.run_command", version):
        yield version


# ---------------------------------------------------------------------------
# Fake operations
# ---------------------------------------------------------------------------

@dataclass
class RecordingOperation(Operation):
    """Operation that records its invocation in a shared log."""

    name: str
    log: list[str] = field(default_factory=list)
    fail: bool = False

    async def run(self, *, verbose: bool = False) -> StepResult:
        self.log.append(self.name)
        if self.fail:
            return StepResult.failure(
                ErrorKind.PROCESS_EXIT, f"{self.name} exited with status: 1", exit_code=1
            )
        return StepResult.success()


@pytest.fixture
def invocation_log() -> list[str]:
    """Shared list that ``RecordingOperation`` instances append to."""
    return []


@pytest.fixture
def make_operation(invocation_log: list[str]):
    """Factory for ``RecordingOperation`` instances sharing ``invocation_log``."""
    def _make(name: str, fail: bool = False) -> RecordingOperation:
        return RecordingOperation(name=name, log=invocation_log, fail=fail)
    return _make
