"""Progress reporting for step sequences.

``ProgressReporter`` wraps a Rich ``Progress`` bar with a fixed total. It
only observes the sequence: nothing it does can fail a step.
"""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import TaskID

from forgekit.utils import console, create_progress


class ProgressReporter:
    """Tracks completion of a known number of steps.

    The completed count only grows and never passes ``total``.  When
    *enabled* is ``False`` no bar is drawn and labels are printed as plain
    lines instead, which leaves the terminal to long-running children such
    as a dev server.

    Use as a context manager so the bar is started and stopped cleanly::

        with ProgressReporter(3) as reporter:
            reporter.set_label("Installing dependencies...")
            reporter.advance()
    """

    def __init__(
        self,
        total: int,
        *,
        enabled: bool = True,
        target: Console | None = None,
    ) -> None:
        if total < 0:
            raise ValueError(f"total must be >= 0, got {total}")
        self.total = total
        self.completed = 0
        self.label = ""
        self.finished = False
        self.enabled = enabled
        self._console = target or console
        self._progress = create_progress(self._console) if enabled else None
        self._task: TaskID | None = None
        self._started = False

    # -- Context manager ---------------------------------------------------

    def __enter__(self) -> "ProgressReporter":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def start(self) -> None:
        if self._progress is None or self._started:
            return
        self._task = self._progress.add_task(self.label, total=self.total or None)
        self._progress.start()
        self._started = True

    def stop(self) -> None:
        if self._progress is None or not self._started:
            return
        self._refresh()
        self._progress.stop()
        self._started = False

    # -- Reporting ---------------------------------------------------------

    def set_label(self, label: str) -> None:
        """Change the text shown next to the bar."""
        self.label = label
        if self._progress is None:
            self._console.print(label, markup=False, highlight=False)
            return
        self._refresh()

    def advance(self) -> None:
        """Mark one more step complete.  Does nothing once ``total`` is reached."""
        if self.completed >= self.total:
            return
        self.completed += 1
        self._refresh()

    def finish(self, label: str) -> None:
        """Show the final label and mark the bar finished."""
        self.label = label
        self.finished = True
        if self._progress is None:
            self._console.print(label, markup=False, highlight=False)
            return
        self._refresh()

    def _refresh(self) -> None:
        if self._progress is None or self._task is None:
            return
        self._progress.update(
            self._task,
            description=self.label,
            completed=self.completed,
        )
        self._progress.refresh()
