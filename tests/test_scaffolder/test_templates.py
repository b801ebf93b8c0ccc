"""Tests for the Jinja2 template renderer (forgekit.scaffolder.templates).

Covers:
- Every shipped template renders with the context recipes pass
- Language-dependent content of tailwind.config
- The slugify filter used for package.json names
- Strict handling of missing context variables
"""

from __future__ import annotations

import json
from pathlib import Path

import jinja2
import pytest

from forgekit.scaffolder.templates import TemplateRenderer, _slugify_filter

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestShippedTemplates:
    def test_vite_config_uses_tailwind_plugin(self, renderer: TemplateRenderer):
        content = renderer.render("frontend/vite.config.j2", {"name": "demo", "lang": "js"})
        assert "import tailwindcss from '@tailwindcss/vite';" in content
        assert "plugins: [react(), tailwindcss()]" in content
        assert content.endswith("\n")

    def test_index_css_imports_tailwind(self, renderer: TemplateRenderer):
        content = renderer.render("frontend/index.css.j2", {"name": "demo", "lang": "js"})
        assert content.startswith('@import "tailwindcss";')
        assert "@media (prefers-color-scheme: light)" in content

    def test_directives_css(self, renderer: TemplateRenderer):
        content = renderer.render("frontend/tailwind-directives.css.j2", {})
        assert content.splitlines() == [
            "@tailwind base;",
            "@tailwind components;",
            "@tailwind utilities;",
        ]

    def test_tailwind_config_js(self, renderer: TemplateRenderer):
        content = renderer.render("frontend/tailwind.config.j2", {"lang": "js"})
        assert content.startswith("/** @type {import('tailwindcss').Config} */")
        assert "satisfies Config" not in content
        assert '"./src/**/*.{js,ts,jsx,tsx}"' in content

    def test_tailwind_config_ts(self, renderer: TemplateRenderer):
        content = renderer.render("frontend/tailwind.config.j2", {"lang": "ts"})
        assert content.startswith("import type { Config } from 'tailwindcss';")
        assert content.rstrip().endswith("satisfies Config;")

    def test_package_json_is_valid_json_named_after_project(self, renderer: TemplateRenderer):
        content = renderer.render("fullstack/package.json.j2", {"name": "My_App"})
        data = json.loads(content)
        assert data["name"] == "my_app"
        assert data["scripts"]["start"] == "node server.js"
        assert "express" in data["dependencies"]
        assert "next" in data["dependencies"]

    def test_server_js_uses_port(self, renderer: TemplateRenderer):
        content = renderer.render("fullstack/server.js.j2", {"name": "demo", "port": 4321})
        assert "require('express')" in content
        assert "process.env.PORT || '4321'" in content
        assert "app.getRequestHandler()" in content


class TestRendererBehaviour:
    def test_missing_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(jinja2.UndefinedError):
            renderer.render("fullstack/server.js.j2", {"name": "demo"})

    def test_unknown_template_raises(self, renderer: TemplateRenderer):
        with pytest.raises(jinja2.TemplateNotFound):
            renderer.render("frontend/nope.j2", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.j2").write_text("Hello {{ name | slugify }}!\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("hello.j2", {"name": "My Project"}) == "Hello my-project!\n"


class TestSlugify:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("demo", "demo"),
            ("My App", "my-app"),
            ("site.v1", "site.v1"),
            ("--weird--", "weird"),
            ("...", "app"),
        ],
    )
    def test_slugify(self, value: str, expected: str):
        assert _slugify_filter(value) == expected
