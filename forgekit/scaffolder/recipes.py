"""Step builders for each scaffolding action.

Every function here returns a ``Step`` whose operations are fully resolved
(command lines formatted, template content rendered) so nothing is decided
while the sequence runs.  External generators are opaque: forgekit only
formats their command lines.
"""

from __future__ import annotations

from pathlib import Path

from forgekit.config import GeneratorConfig
from forgekit.models import Language
from forgekit.steps import RunCommand, Step, WriteFile
from forgekit.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def styling_config_path(project_dir: Path, lang: Language, *, postcss: bool = False) -> Path:
    """Return the styling config file written for *lang*.

    The extension is ``ts`` exactly when *lang* is TypeScript.
    """
    stem = "tailwind.config" if postcss else "vite.config"
    return project_dir / f"{stem}.{lang.value}"


def stylesheet_path(project_dir: Path) -> Path:
    return project_dir / "src" / "index.css"


def vite_template(lang: Language) -> str:
    """create-vite template matching the SWC React plugin in vite.config."""
    return "react-swc-ts" if lang is Language.TS else "react-swc"


# ---------------------------------------------------------------------------
# Frontend
# ---------------------------------------------------------------------------


def react_vite_step(
    root: Path, name: str, lang: Language, generators: GeneratorConfig
) -> Step:
    command = f"npx {generators.create_vite} {name} --template {vite_template(lang)}"
    return Step(
        label="Creating a new React project with Vite...",
        operations=[RunCommand(command, cwd=root)],
        failure_message="Failed to create a new React project with Vite.",
    )


def install_step(root: Path, name: str) -> Step:
    return Step(
        label="Installing dependencies...",
        operations=[RunCommand("npm install", cwd=root / name)],
        failure_message="Failed to install dependencies.",
    )


def tailwind_vite_step(
    root: Path, name: str, lang: Language, renderer: TemplateRenderer
) -> Step:
    """Tailwind v4 through the ``@tailwindcss/vite`` plugin."""
    project_dir = root / name
    context = {"name": name, "lang": lang.value}
    return Step(
        label="Setting up Tailwind CSS...",
        operations=[
            WriteFile(
                styling_config_path(project_dir, lang),
                renderer.render("frontend/vite.config.j2", context),
            ),
            WriteFile(
                stylesheet_path(project_dir),
                renderer.render("frontend/index.css.j2", context),
            ),
            RunCommand("npm install tailwindcss @tailwindcss/vite", cwd=project_dir),
        ],
        failure_message="Failed to setup Tailwind.",
    )


def tailwind_postcss_step(
    root: Path, name: str, lang: Language, renderer: TemplateRenderer
) -> Step:
    """Tailwind v3 through PostCSS, with a ``tailwind.config`` file."""
    project_dir = root / name
    context = {"name": name, "lang": lang.value}
    init_command = "npx tailwindcss init -p"
    if lang is Language.TS:
        init_command += " --ts"
    return Step(
        label="Setting up Tailwind CSS with PostCSS...",
        operations=[
            RunCommand("npm install -D tailwindcss@3 postcss autoprefixer", cwd=project_dir),
            RunCommand(init_command, cwd=project_dir),
            WriteFile(
                styling_config_path(project_dir, lang, postcss=True),
                renderer.render("frontend/tailwind.config.j2", context),
            ),
            WriteFile(
                stylesheet_path(project_dir),
                renderer.render("frontend/tailwind-directives.css.j2", context),
            ),
        ],
        failure_message="Failed to setup Tailwind.",
    )


# ---------------------------------------------------------------------------
# Full stack
# ---------------------------------------------------------------------------


def nextjs_step(
    root: Path, name: str, generators: GeneratorConfig, renderer: TemplateRenderer
) -> Step:
    project_dir = root / name
    return Step(
        label="Setting up NextJs...",
        operations=[
            RunCommand(f"npx {generators.create_next} {name}", cwd=root),
            WriteFile(
                project_dir / "package.json",
                renderer.render("fullstack/package.json.j2", {"name": name}),
            ),
        ],
        failure_message="Failed to setup NextJs.",
    )


def express_step(
    root: Path, name: str, generators: GeneratorConfig, renderer: TemplateRenderer
) -> Step:
    project_dir = root / name
    return Step(
        label="Setting up ExpressJs...",
        operations=[
            RunCommand("npm install express", cwd=project_dir),
            WriteFile(
                project_dir / "server.js",
                renderer.render(
                    "fullstack/server.js.j2",
                    {"name": name, "port": generators.server_port},
                ),
            ),
        ],
        failure_message="Failed to setup ExpressJs.",
    )


# ---------------------------------------------------------------------------
# Dev server
# ---------------------------------------------------------------------------


def dev_server_step(root: Path, name: str, generators: GeneratorConfig) -> Step:
    # Runs until the server exits or the user interrupts; no timeout.
    return Step(
        label="Starting the development server...",
        operations=[RunCommand(f"npm run {generators.dev_script}", cwd=root / name)],
        failure_message="Failed to start the development server.",
    )
