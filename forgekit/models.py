"""Pydantic v2 models shared by the forgekit commands.

Defines the command invocation built from CLI arguments and the typed result
every step returns instead of exiting the process.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Action(str, Enum):
    """Top-level scaffolding actions exposed as subcommands."""
    FABRICATE = "fabricate"
    CONSTRUCT = "construct"
    ASSEMBLE = "assemble"
    IGNITE = "ignite"
    BLUEPRINT = "blueprint"


class Language(str, Enum):
    """Source language of the generated frontend."""
    JS = "js"
    TS = "ts"


class AssembleTarget(str, Enum):
    """Pieces that ``assemble`` can add on their own."""
    REACT_VITE = "react-vite"
    TAILWINDCSS = "tailwindcss"


class ErrorKind(str, Enum):
    """Classification of step failures."""
    MISSING_DEPENDENCY = "missing_dependency"
    INVALID_ARGUMENT = "invalid_argument"
    PROCESS_EXIT = "process_exit"
    PROCESS_LAUNCH = "process_launch"
    FILE_WRITE = "file_write"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class InvalidArgumentError(ValueError):
    """Raised when a CLI argument has a value outside its allowed set."""


def parse_language(value: str) -> Language:
    """Return the ``Language`` for *value* or raise ``InvalidArgumentError``."""
    try:
        return Language(value)
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid language: {value}. Supported values are 'js' or 'ts'."
        ) from None


_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def parse_project_name(value: str) -> str:
    """Return *value* if it is usable as a project directory name.

    The name is interpolated into shell command lines, so only letters,
    digits, dots, hyphens and underscores are accepted.
    """
    name = value.strip()
    if not name:
        raise InvalidArgumentError("Project name must not be empty.")
    if not _PROJECT_NAME_RE.match(name):
        raise InvalidArgumentError(
            f"Invalid project name: {value!r}. Use letters, digits, '.', '-' or '_'."
        )
    return name


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class StepResult(BaseModel):
    """Outcome of a step, an action inside a step, or a whole sequence."""
    ok: bool = Field(..., description="Whether the work succeeded")
    kind: Optional[ErrorKind] = Field(default=None, description="Failure class, None on success")
    message: str = Field(default="", description="Human-readable failure description")
    exit_code: Optional[int] = Field(default=None, description="Child exit code, if any")

    @classmethod
    def success(cls) -> "StepResult":
        return cls(ok=True)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        exit_code: Optional[int] = None,
    ) -> "StepResult":
        return cls(ok=False, kind=kind, message=message, exit_code=exit_code)

    def with_context(self, context: str) -> "StepResult":
        """Return a copy whose message is prefixed with *context*."""
        if self.ok:
            return self
        message = f"{context}: {self.message}" if self.message else context
        return self.model_copy(update={"message": message})


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------

class CommandInvocation(BaseModel):
    """A selected action plus its parameters, built once per process run."""
    action: Action = Field(..., description="Subcommand that was invoked")
    name: str = Field(..., min_length=1, description="Project directory name")
    lang: Language = Field(default=Language.JS, description="Frontend language")
    flag: bool = Field(default=False, description="Fabricate: use the PostCSS Tailwind setup")
    target: Optional[AssembleTarget] = Field(
        default=None, description="Assemble: which piece to add"
    )
