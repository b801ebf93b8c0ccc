"""forgekit configuration.

Typed settings for the scaffolding commands. All settings use Pydantic v2
models so they are validated at construction time and can be read from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from forgekit.models import InvalidArgumentError

_TRUTHY = {"1", "true", "yes", "on"}

# GeneratorConfig field -> environment variable
_GENERATOR_ENV = {
    "create_vite": "FORGE_CREATE_VITE",
    "create_next": "FORGE_CREATE_NEXT",
    "dev_script": "FORGE_DEV_SCRIPT",
    "server_port": "FORGE_SERVER_PORT",
}


class GeneratorConfig(BaseModel):
    """Package specs passed to ``npx`` for the project generators."""

    create_vite: str = Field(default="create-vite@latest")
    create_next: str = Field(default="create-next-app@latest")
    dev_script: str = Field(default="dev", min_length=1, description="npm script run by 'ignite'")
    server_port: int = Field(default=3000, ge=1, le=65535, description="Port in the generated server.js")


class Config(BaseModel):
    """Global forgekit configuration.

    Created once by the CLI entry point and passed to the dispatcher.
    """

    required_tools: list[str] = Field(default_factory=lambda: ["npm", "npx"])
    generators: GeneratorConfig = Field(default_factory=GeneratorConfig)
    show_progress: bool = Field(default=True)
    verbose: bool = Field(default=False, description="Echo each command before running it")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FORGE_REQUIRED_TOOLS, FORGE_CREATE_VITE, FORGE_CREATE_NEXT,
            FORGE_DEV_SCRIPT, FORGE_SERVER_PORT, FORGE_NO_PROGRESS, FORGE_VERBOSE.

        Raises:
            InvalidArgumentError: If a variable holds a value its setting
                does not accept.  The message names the variable.
        """
        generator_kwargs: dict[str, Any] = {}
        for field_name, env_name in _GENERATOR_ENV.items():
            value = os.environ.get(env_name)
            if value:
                generator_kwargs[field_name] = value

        try:
            generators = GeneratorConfig(**generator_kwargs)
        except ValidationError as exc:
            error = exc.errors()[0]
            env_name = _GENERATOR_ENV[str(error["loc"][0])]
            raise InvalidArgumentError(
                f"Invalid {env_name}: {os.environ[env_name]!r}. {error['msg']}."
            ) from None

        tools_str = os.environ.get("FORGE_REQUIRED_TOOLS", "npm,npx")
        tools = [t.strip() for t in tools_str.split(",") if t.strip()]

        return cls(
            required_tools=tools,
            generators=generators,
            show_progress=os.environ.get("FORGE_NO_PROGRESS", "").lower() not in _TRUTHY,
            verbose=os.environ.get("FORGE_VERBOSE", "").lower() in _TRUTHY,
        )
