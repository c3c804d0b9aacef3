"""htmx-starter configuration.

Typed configuration for a scaffolding run. Settings use Pydantic v2 models so
they are validated at construction time and can be loaded from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from htmx_starter import __version__

BUNDLED_TEMPLATES_DIR = Path(__file__).parent / "scaffolder" / "templates"


class CommandMetadata(BaseModel):
    """Static CLI metadata, consumed only by ``--help`` and ``--version``."""

    model_config = ConfigDict(frozen=True)

    name: str = "htmx-starter"
    version: str = __version__
    author: str = "reed11tim@gmail.com"
    description: str = "Initializes a new project with Rust, Go, and TypeScript"


METADATA = CommandMetadata()


class Config(BaseModel):
    """Settings for one scaffolding run.

    Instances are created once by the CLI entry point and passed to the
    ``Orchestrator``.
    """

    templates_dir: Path = Field(
        default=BUNDLED_TEMPLATES_DIR,
        description="Root directory holding one template tree per stack",
    )
    destination: Path = Field(
        default_factory=Path.cwd,
        description="Directory the template is materialized into",
    )
    project_name: str = Field(
        default="",
        description="Name passed to module initialisation; computed from the stack when empty",
    )

    def project_name_for(self, stack_value: str) -> str:
        """Return the configured project name, or ``<stack>_template``."""
        return self.project_name or f"{stack_value.lower()}_template"

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            HTMX_STARTER_TEMPLATES_DIR, HTMX_STARTER_DESTINATION,
            HTMX_STARTER_PROJECT_NAME.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("HTMX_STARTER_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["HTMX_STARTER_TEMPLATES_DIR"])
        if os.environ.get("HTMX_STARTER_DESTINATION"):
            kwargs["destination"] = Path(os.environ["HTMX_STARTER_DESTINATION"])
        if os.environ.get("HTMX_STARTER_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["HTMX_STARTER_PROJECT_NAME"]
        return cls(**kwargs)
