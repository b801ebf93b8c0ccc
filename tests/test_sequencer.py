"""Unit tests for StepSequencer (forgekit.sequencer).

Tests cover:
- Steps run in order and the reporter advances once per step
- A failing step stops the sequence; later steps never start
- finish is only reached when every step succeeds
- Reporter total must match the step count
"""

from __future__ import annotations

import pytest

from forgekit.models import ErrorKind
from forgekit.progress import ProgressReporter
from forgekit.sequencer import StepSequencer
from forgekit.steps import RunCommand, Step

pytestmark = pytest.mark.unit


def _steps(make_operation, count: int, fail_at: int | None = None) -> list[Step]:
    return [
        Step(
            label=f"step {i}",
            operations=[make_operation(f"op{i}", fail=(i == fail_at))],
            failure_message=f"Step {i} failed.",
        )
        for i in range(count)
    ]


class TestSequencing:
    @pytest.mark.asyncio
    async def test_all_steps_run_in_order(self, make_operation, invocation_log):
        reporter = ProgressReporter(3, enabled=False)
        sequencer = StepSequencer(reporter)
        result = await sequencer.run(_steps(make_operation, 3), "All done")
        assert result.ok
        assert invocation_log == ["op0", "op1", "op2"]
        assert sequencer.executed == ["step 0", "step 1", "step 2"]
        assert reporter.completed == 3
        assert reporter.finished
        assert reporter.label == "All done"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count,fail_at", [(1, 0), (3, 0), (3, 1), (3, 2), (5, 3)])
    async def test_failure_short_circuits(self, make_operation, invocation_log, count, fail_at):
        reporter = ProgressReporter(count, enabled=False)
        sequencer = StepSequencer(reporter)
        result = await sequencer.run(_steps(make_operation, count, fail_at), "never")

        assert not result.ok
        assert result.kind is ErrorKind.PROCESS_EXIT
        assert result.message.startswith(f"Step {fail_at} failed")
        assert invocation_log == [f"op{i}" for i in range(fail_at + 1)]
        assert reporter.completed == fail_at
        assert not reporter.finished

    @pytest.mark.asyncio
    async def test_progress_never_exceeds_total(self, make_operation):
        reporter = ProgressReporter(4, enabled=False)
        await StepSequencer(reporter).run(_steps(make_operation, 4), "done")
        reporter.advance()
        assert reporter.completed == reporter.total == 4

    @pytest.mark.asyncio
    async def test_empty_sequence_finishes(self):
        reporter = ProgressReporter(0, enabled=False)
        result = await StepSequencer(reporter).run([], "Nothing to do")
        assert result.ok
        assert reporter.finished

    @pytest.mark.asyncio
    async def test_labels_are_printed_before_each_step(self, make_operation, capsys):
        reporter = ProgressReporter(2, enabled=False)
        await StepSequencer(reporter).run(_steps(make_operation, 2), "finished!")
        out = capsys.readouterr().out
        assert out.index("step 0") < out.index("step 1") < out.index("finished!")

    @pytest.mark.asyncio
    async def test_total_mismatch_rejected(self, make_operation, invocation_log):
        reporter = ProgressReporter(2, enabled=False)
        with pytest.raises(ValueError, match="does not match"):
            await StepSequencer(reporter).run(_steps(make_operation, 3), "x")
        assert invocation_log == []

    @pytest.mark.asyncio
    async def test_verbose_is_passed_to_operations(self, mock_step_commands, capsys):
        reporter = ProgressReporter(1, enabled=False)
        step = Step("Installing dependencies...", [RunCommand("npm install")])
        await StepSequencer(reporter, verbose=True).run([step], "done")
        assert "Running command:" in capsys.readouterr().out
