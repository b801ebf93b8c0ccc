"""forgekit command-line interface.

Usage::

    forge fabricate -n my-app -l ts
    forge fabricate -n my-app -f
    forge construct -n my-fullstack-app
    forge assemble tailwindcss -n my-app -l ts
    forge ignite -n my-app
    forge blueprint -n my-app

``main`` is the only place that terminates the process: every failure is
returned to it as a ``StepResult`` (or an ``InvalidArgumentError`` while the
arguments and ``FORGE_*`` variables are checked) and turned into exit code 1.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from forgekit import __version__
from forgekit.config import Config
from forgekit.dispatcher import CommandDispatcher
from forgekit.models import (
    Action,
    AssembleTarget,
    CommandInvocation,
    InvalidArgumentError,
    Language,
    parse_language,
    parse_project_name,
)
from forgekit.utils import print_error, print_warning

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_output_options(parser: argparse.ArgumentParser, default) -> None:
    """Add ``--verbose`` and ``--no-progress`` to *parser*.

    Accepted both before and after the subcommand.  The subcommand copies use
    ``argparse.SUPPRESS`` so they leave a value given before the subcommand
    untouched when they are absent.
    """
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=default,
        help="Echo each command before running it",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        default=default,
        help="Print step labels instead of drawing a progress bar",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the ``forge`` argument parser with one subparser per action."""
    parser = argparse.ArgumentParser(
        prog="forge",
        description="forgekit -- scaffold React, Tailwind and Next.js projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  forge fabricate -n my-app -l ts\n"
            "  forge construct -n my-fullstack-app\n"
            "  forge assemble tailwindcss -n my-app\n"
            "  forge ignite -n my-app\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_output_options(parser, default=None)

    output_parent = argparse.ArgumentParser(add_help=False)
    _add_output_options(output_parent, default=argparse.SUPPRESS)

    name_parent = argparse.ArgumentParser(add_help=False)
    name_parent.add_argument(
        "--name", "-n",
        required=True,
        help="Project directory name",
    )

    # Checked by parse_language so an unknown value exits 1, not argparse's 2.
    lang_parent = argparse.ArgumentParser(add_help=False)
    lang_parent.add_argument(
        "--lang", "-l",
        default=Language.JS.value,
        help="Frontend language: js or ts (default: js)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    fabricate = subparsers.add_parser(
        Action.FABRICATE.value,
        parents=[output_parent, name_parent, lang_parent],
        help="Create a React + Vite project with Tailwind CSS",
    )
    fabricate.add_argument(
        "--flag", "-f", "--postcss",
        dest="flag",
        action="store_true",
        help="Set up Tailwind through PostCSS instead of the Vite plugin",
    )

    subparsers.add_parser(
        Action.CONSTRUCT.value,
        parents=[output_parent, name_parent],
        help="Create a Next.js project served by Express",
    )

    assemble = subparsers.add_parser(
        Action.ASSEMBLE.value,
        parents=[output_parent, name_parent, lang_parent],
        help="Add a single piece: a React + Vite project or Tailwind CSS",
    )
    assemble.add_argument(
        "target",
        nargs="?",
        choices=[t.value for t in AssembleTarget],
        help="What to assemble",
    )

    subparsers.add_parser(
        Action.IGNITE.value,
        parents=[output_parent, name_parent],
        help="Start the development server of an existing project",
    )
    subparsers.add_parser(
        Action.BLUEPRINT.value,
        parents=[output_parent, name_parent],
        help="Reserved for project blueprints",
    )

    return parser


def build_invocation(args: argparse.Namespace) -> CommandInvocation:
    """Validate parsed arguments and build the ``CommandInvocation``.

    Raises:
        InvalidArgumentError: If the name or language is not acceptable.
    """
    action = Action(args.command)
    name = parse_project_name(args.name)
    lang = parse_language(getattr(args, "lang", Language.JS.value))
    target = getattr(args, "target", None)
    return CommandInvocation(
        action=action,
        name=name,
        lang=lang,
        flag=getattr(args, "flag", False),
        target=AssembleTarget(target) if target else None,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run(argv: list[str] | None = None, config: Config | None = None) -> int:
    """Parse *argv*, execute the selected command and return an exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        config = config or Config.from_env()
        invocation = build_invocation(args)
    except InvalidArgumentError as exc:
        print_error(str(exc))
        return EXIT_FAILURE

    if args.verbose is not None:
        config.verbose = args.verbose
    if args.no_progress is not None:
        config.show_progress = not args.no_progress

    dispatcher = CommandDispatcher(config)
    try:
        result = asyncio.run(dispatcher.execute(invocation))
    except KeyboardInterrupt:
        print_warning("Interrupted.")
        return EXIT_INTERRUPTED

    if not result.ok:
        print_error(result.message)
        return EXIT_FAILURE
    return EXIT_OK


def main() -> None:
    """CLI entry point for ``forge`` and ``python -m forgekit.cli``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
