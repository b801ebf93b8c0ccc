"""Command dispatch: turn a ``CommandInvocation`` into a plan and run it.

Each top-level action maps to exactly one ``Plan``.  Building a plan has no
side effects; executing it checks the required tools, runs the steps through
a ``StepSequencer`` and prints the closing message.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from forgekit.config import Config
from forgekit.dependencies import check_dependencies
from forgekit.models import Action, AssembleTarget, CommandInvocation, StepResult
from forgekit.progress import ProgressReporter
from forgekit.scaffolder import recipes
from forgekit.scaffolder.templates import TemplateRenderer
from forgekit.sequencer import StepSequencer
from forgekit.steps import Step
from forgekit.utils import format_duration, print_info, print_success, print_warning


@dataclass
class Plan:
    """The step sequence for one invocation plus what surrounds it.

    Attributes:
        steps: Ordered steps; ``len(steps)`` is the progress total.
        finish_label: Shown by the progress reporter after the last step.
        required_tools: External tools checked before any step runs.
        intro: Printed before the dependency check.
        success_message: Printed after the sequence succeeds.
        show_progress: Draw a progress bar (off for the dev server).
        notice: When set, nothing runs; the notice is printed and the
            command ends without failing.
    """

    steps: list[Step] = field(default_factory=list)
    finish_label: str = "Done!"
    required_tools: list[str] = field(default_factory=list)
    intro: str | None = None
    success_message: str | None = None
    show_progress: bool = True
    notice: str | None = None


class CommandDispatcher:
    """Routes each action to its plan builder and executes the result."""

    def __init__(
        self,
        config: Config,
        *,
        root: Path | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.root = root or Path(".")
        self.renderer = renderer or TemplateRenderer()
        self._builders: dict[Action, Callable[[CommandInvocation], Plan]] = {
            Action.FABRICATE: self._fabricate,
            Action.CONSTRUCT: self._construct,
            Action.ASSEMBLE: self._assemble,
            Action.IGNITE: self._ignite,
            Action.BLUEPRINT: self._blueprint,
        }

    # -- Public API --------------------------------------------------------

    def plan(self, invocation: CommandInvocation) -> Plan:
        """Build the plan for *invocation* without touching the filesystem."""
        return self._builders[invocation.action](invocation)

    async def execute(self, invocation: CommandInvocation) -> StepResult:
        """Run the plan for *invocation* and return its outcome."""
        plan = self.plan(invocation)

        if plan.notice:
            print_warning(plan.notice)
            return StepResult.success()

        if plan.intro:
            print_info(plan.intro)

        preflight = await check_dependencies(plan.required_tools)
        if not preflight.ok:
            return preflight

        reporter = ProgressReporter(
            len(plan.steps),
            enabled=self.config.show_progress and plan.show_progress,
        )
        sequencer = StepSequencer(reporter, verbose=self.config.verbose)
        started = time.monotonic()
        result = await sequencer.run(plan.steps, plan.finish_label)

        if result.ok and plan.success_message:
            print_success(plan.success_message)
        if result.ok and plan.steps and plan.show_progress:
            elapsed = format_duration(time.monotonic() - started)
            print_info(f"Finished {len(plan.steps)} step(s) in {elapsed}.")
        return result

    # -- Plan builders -----------------------------------------------------

    def _fabricate(self, invocation: CommandInvocation) -> Plan:
        name, lang = invocation.name, invocation.lang
        generators = self.config.generators
        if invocation.flag:
            styling = recipes.tailwind_postcss_step(self.root, name, lang, self.renderer)
        else:
            styling = recipes.tailwind_vite_step(self.root, name, lang, self.renderer)
        return Plan(
            steps=[
                recipes.react_vite_step(self.root, name, lang, generators),
                recipes.install_step(self.root, name),
                styling,
            ],
            finish_label="React-Vite project setup complete!",
            required_tools=list(self.config.required_tools),
            intro=f"Creating a new react-vite project: {name}",
            success_message=f"Navigate to '{name}' to start building your project.",
        )

    def _construct(self, invocation: CommandInvocation) -> Plan:
        name = invocation.name
        generators = self.config.generators
        return Plan(
            steps=[
                recipes.nextjs_step(self.root, name, generators, self.renderer),
                recipes.express_step(self.root, name, generators, self.renderer),
            ],
            finish_label="NextJs and ExpressJs setup complete!",
            required_tools=list(self.config.required_tools),
            intro=f"Creating a new full stack project: {name}",
            success_message=(
                f"Your full stack project is ready to go! "
                f"Navigate to '{name}' to start building your project."
            ),
        )

    def _assemble(self, invocation: CommandInvocation) -> Plan:
        name, lang = invocation.name, invocation.lang
        if invocation.target is None:
            return Plan(
                notice="Error: No target provided for 'assemble'. Use 'react-vite' or 'tailwindcss'.",
            )
        if invocation.target is AssembleTarget.REACT_VITE:
            return Plan(
                steps=[recipes.react_vite_step(self.root, name, lang, self.config.generators)],
                finish_label="React-Vite project created!",
                required_tools=list(self.config.required_tools),
                success_message=(
                    f"Run 'npm install' inside '{name}' to install its dependencies."
                ),
            )
        return Plan(
            steps=[recipes.tailwind_vite_step(self.root, name, lang, self.renderer)],
            finish_label="Tailwind CSS setup complete!",
            required_tools=list(self.config.required_tools),
            success_message=f"Tailwind CSS is ready in '{name}'.",
        )

    def _ignite(self, invocation: CommandInvocation) -> Plan:
        return Plan(
            steps=[recipes.dev_server_step(self.root, invocation.name, self.config.generators)],
            finish_label="Development server stopped.",
            required_tools=list(self.config.required_tools),
            show_progress=False,
        )

    def _blueprint(self, invocation: CommandInvocation) -> Plan:
        return Plan(
            finish_label=f"Executing Blueprint command for: {invocation.name}",
            show_progress=False,
        )
