"""Template registry: one template tree and bootstrap recipe per stack.

The registry is a static table keyed by ``StackIdentifier``.  It is built once
at import time and checked for totality, so ``resolve`` can never come back
empty-handed for a valid enum member.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Stack identifiers
# ---------------------------------------------------------------------------


class StackIdentifier(str, Enum):
    """Supported target stacks, in presentation order."""

    RUST = "rust"
    GO = "go"
    TYPESCRIPT = "typescript"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def color(self) -> str:
        """Rich style string for the stack's brand colour."""
        return _COLORS[self]


_LABELS: dict[StackIdentifier, str] = {
    StackIdentifier.RUST: "Rust",
    StackIdentifier.GO: "Go",
    StackIdentifier.TYPESCRIPT: "TypeScript",
}

_COLORS: dict[StackIdentifier, str] = {
    StackIdentifier.RUST: "rgb(184,115,51)",
    StackIdentifier.GO: "rgb(0,173,216)",
    StackIdentifier.TYPESCRIPT: "rgb(0,122,204)",
}


# ---------------------------------------------------------------------------
# Bootstrap steps
# ---------------------------------------------------------------------------

PROJECT_NAME_PLACEHOLDER = "{project_name}"


class RunCommand(BaseModel):
    """Run an executable from ``PATH`` inside the destination directory."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["run"] = "run"
    executable: str = Field(..., min_length=1)
    args: tuple[str, ...] = ()
    description: str = ""

    def argv(self, project_name: str) -> list[str]:
        """Full argument vector with ``{project_name}`` substituted."""
        args = [a.replace(PROJECT_NAME_PLACEHOLDER, project_name) for a in self.args]
        return [self.executable, *args]

    @property
    def summary(self) -> str:
        return self.description or " ".join([self.executable, *self.args])


class WriteFile(BaseModel):
    """Write a file with fixed contents at a path relative to the destination."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["write"] = "write"
    path: str = Field(..., min_length=1)
    content: str
    description: str = ""

    @property
    def summary(self) -> str:
        return self.description or f"write {self.path}"


BootstrapStep = Annotated[Union[RunCommand, WriteFile], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Template spec
# ---------------------------------------------------------------------------


class TemplateSpec(BaseModel):
    """Where a stack's template lives and what to run after copying it."""

    model_config = ConfigDict(frozen=True)

    stack: StackIdentifier
    template_dir: str = Field(..., min_length=1, description="Directory name under the templates root")
    steps: tuple[BootstrapStep, ...] = ()

    def source(self, templates_root: str | Path) -> Path:
        """Absolute path of this stack's template tree."""
        return Path(templates_root) / self.template_dir


TSCONFIG_JSON = """{
  "compilerOptions": {
    "target": "es6",
    "module": "commonjs",
    "strict": true,
    "esModuleInterop": true,
    "skipLibCheck": true,
    "forceConsistentCasingInFileNames": true
  }
}
"""

TYPESCRIPT_DEV_DEPENDENCIES: tuple[str, ...] = (
    "typescript",
    "@types/node",
    "@types/express",
    "nodemon",
)

TYPESCRIPT_DEPENDENCIES: tuple[str, ...] = (
    "express",
    "@preact/signals-core",
)


def _default_specs() -> list[TemplateSpec]:
    return [
        TemplateSpec(stack=StackIdentifier.RUST, template_dir="rust"),
        TemplateSpec(
            stack=StackIdentifier.GO,
            template_dir="go",
            steps=(
                RunCommand(
                    executable="go",
                    args=("mod", "init", PROJECT_NAME_PLACEHOLDER),
                    description="initialise Go module",
                ),
            ),
        ),
        TemplateSpec(
            stack=StackIdentifier.TYPESCRIPT,
            template_dir="typescript",
            steps=(
                # package.json has to exist before anything is installed into it.
                RunCommand(executable="npm", args=("init", "-y"), description="initialise npm project"),
                WriteFile(path="tsconfig.json", content=TSCONFIG_JSON, description="write tsconfig.json"),
                RunCommand(
                    executable="npm",
                    args=("install", "--save-dev", *TYPESCRIPT_DEV_DEPENDENCIES),
                    description="install TypeScript dev dependencies",
                ),
                RunCommand(
                    executable="npm",
                    args=("install", *TYPESCRIPT_DEPENDENCIES),
                    description="install TypeScript dependencies",
                ),
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def build_registry(specs: list[TemplateSpec] | None = None) -> dict[StackIdentifier, TemplateSpec]:
    """Index *specs* by stack and check that every stack has exactly one entry.

    Raises:
        RuntimeError: If a stack is missing or registered twice.
    """
    if specs is None:
        specs = _default_specs()

    registry: dict[StackIdentifier, TemplateSpec] = {}
    for spec in specs:
        if spec.stack in registry:
            raise RuntimeError(f"Duplicate template registered for {spec.stack.label}")
        registry[spec.stack] = spec

    missing = [s.label for s in StackIdentifier if s not in registry]
    if missing:
        raise RuntimeError(f"No template registered for: {', '.join(missing)}")
    return registry


REGISTRY = build_registry()


def resolve(
    stack: StackIdentifier,
    registry: dict[StackIdentifier, TemplateSpec] | None = None,
) -> TemplateSpec:
    """Return the ``TemplateSpec`` for *stack*."""
    return (registry if registry is not None else REGISTRY)[stack]
