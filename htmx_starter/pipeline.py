"""htmx-starter orchestrator.

Sequences a scaffolding run:

    START -> SELECTING -> RESOLVING -> MATERIALIZING -> BOOTSTRAPPING -> DONE

Any stage failure moves the run to the absorbing FAILED state; there is no
recovery and no going back.  The template is materialized directly into the
destination directory (the current working directory by default); no project
subdirectory is created.

Usage::

    htmx-starter
    python -m htmx_starter --version
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Sequence

from rich.panel import Panel

from htmx_starter.config import METADATA, Config
from htmx_starter.errors import CopyError, StarterError
from htmx_starter.scaffolder.bootstrap import BootstrapRunner, StepResult
from htmx_starter.scaffolder.materializer import CopyOutcome, copy_tree
from htmx_starter.scaffolder.registry import StackIdentifier, TemplateSpec, resolve
from htmx_starter.scaffolder.selector import select_stack
from htmx_starter.utils import (
    console,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
)


class Stage(str, Enum):
    """Orchestrator states."""

    START = "start"
    SELECTING = "selecting"
    RESOLVING = "resolving"
    MATERIALIZING = "materializing"
    BOOTSTRAPPING = "bootstrapping"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    """Final state of a run."""

    stage: Stage = Stage.START
    failed_stage: Stage | None = None
    stack: StackIdentifier | None = None
    project_name: str = ""
    outcome: CopyOutcome | None = None
    steps: list[StepResult] | None = None
    error: StarterError | None = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.stage is Stage.DONE


Materializer = Callable[[Path, Path], Awaitable[CopyOutcome]]


class Orchestrator:
    """Drives one scaffolding run from selection to bootstrap.

    Collaborators are injectable so each stage can be replaced in tests.
    """

    def __init__(
        self,
        config: Config,
        selector: Callable[[], StackIdentifier] = select_stack,
        registry: dict[StackIdentifier, TemplateSpec] | None = None,
        materializer: Materializer = copy_tree,
    ) -> None:
        self.config = config
        self.selector = selector
        self.registry = registry
        self.materializer = materializer
        self.result = RunResult()

    @property
    def stage(self) -> Stage:
        return self.result.stage

    def _enter(self, stage: Stage) -> None:
        self.result.stage = stage
        if stage not in (Stage.DONE, Stage.FAILED):
            detail = self.result.stack.label if self.result.stack else ""
            print_stage_header(stage.value, detail)

    async def run(self) -> RunResult:
        """Execute every stage in order and return the final ``RunResult``.

        Typed stage failures are captured in the result, never raised.
        """
        self.result = RunResult()
        started = time.monotonic()
        try:
            await self._run_stages()
        except StarterError as exc:
            self.result.failed_stage = self.result.stage
            self.result.error = exc
            self.result.stage = Stage.FAILED
        self.result.duration = time.monotonic() - started
        return self.result

    async def _run_stages(self) -> None:
        self._enter(Stage.SELECTING)
        stack = self.selector()
        self.result.stack = stack
        self.result.project_name = self.config.project_name_for(stack.value)

        self._enter(Stage.RESOLVING)
        spec = resolve(stack, self.registry)
        source = spec.source(self.config.templates_dir)
        destination = self.config.destination
        console.print(f"Initializing a new {stack.label} project...")
        console.print(f"  Template:    {source}")
        console.print(f"  Destination: {destination}")

        self._enter(Stage.MATERIALIZING)
        outcome = await self.materializer(source, destination)
        self.result.outcome = outcome
        if not outcome.ok:
            raise CopyError(stack.label, outcome.failed_path, outcome.cause)
        console.print(f"  [green]+[/green] Copied {len(outcome.copied)} files")

        self._enter(Stage.BOOTSTRAPPING)
        if spec.steps:
            runner = BootstrapRunner(destination, self.result.project_name, stack=stack.label)
            self.result.steps = await runner.run(spec.steps)
        else:
            self.result.steps = []
            console.print("  [dim]No bootstrap steps for this stack[/dim]")

        self._enter(Stage.DONE)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Argument parser carrying only ``--help`` and ``--version``."""
    parser = argparse.ArgumentParser(
        prog=METADATA.name,
        description=METADATA.description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Run inside an empty directory; the template is copied into the\n"
            "current working directory.\n\n"
            f"Author: {METADATA.author}"
        ),
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {METADATA.version}",
    )
    return parser


def describe_failure(result: RunResult) -> str:
    """One-line diagnostic naming the stack, the stage and the cause."""
    stack = result.stack.label if result.stack else "no stack selected"
    stage = result.failed_stage.value if result.failed_stage else "unknown"
    return f"Error [{stack}] during {stage}: {result.error}"


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``htmx-starter``."""
    build_parser().parse_args(argv)

    config = Config.from_env()
    console.print(
        Panel(
            f"[bold]{METADATA.name}[/bold] {METADATA.version}\n{METADATA.description}",
            style="cyan",
        )
    )

    result = asyncio.run(Orchestrator(config).run())

    if not result.success:
        print_error(describe_failure(result))
        sys.exit(1)

    print_summary_table(
        {
            "Stack": result.stack.label,
            "Project name": result.project_name,
            "Files copied": str(len(result.outcome.copied)),
            "Bootstrap steps": str(len(result.steps or [])),
            "Duration": format_duration(result.duration),
        },
        title="Project setup complete",
    )
    print_success(f"Project setup complete for {result.stack.label}!")


if __name__ == "__main__":
    main()
