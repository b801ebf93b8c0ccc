"""Ordered, fail-fast execution of steps.

The sequencer runs one step at a time on the event loop.  The first failing
step ends the sequence: its result is returned unchanged and no later step
starts.  Nothing is rolled back.
"""

from __future__ import annotations

from collections.abc import Sequence

from forgekit.models import StepResult
from forgekit.progress import ProgressReporter
from forgekit.steps import Step


class StepSequencer:
    """Runs a step sequence while driving a ``ProgressReporter``.

    Attributes:
        reporter: Progress display, owned by this sequencer for one run.
        verbose: Echo command lines before running them.
        executed: Labels of the steps that were started, in order.
    """

    def __init__(self, reporter: ProgressReporter, *, verbose: bool = False) -> None:
        self.reporter = reporter
        self.verbose = verbose
        self.executed: list[str] = []

    async def run(self, steps: Sequence[Step], finish_label: str) -> StepResult:
        """Execute *steps* in order, stopping at the first failure.

        Returns:
            ``StepResult.success()`` when every step succeeded, otherwise the
            failing step's result.

        Raises:
            ValueError: If the reporter's total does not match ``len(steps)``.
        """
        if self.reporter.total != len(steps):
            raise ValueError(
                f"Progress total {self.reporter.total} does not match {len(steps)} steps"
            )

        with self.reporter:
            for step in steps:
                self.reporter.set_label(step.label)
                self.executed.append(step.label)
                result = await step.run(verbose=self.verbose)
                if not result.ok:
                    return result
                self.reporter.advance()
            self.reporter.finish(finish_label)

        return StepResult.success()
