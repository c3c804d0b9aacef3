"""Post-copy bootstrap steps.

Runs a template's ``BootstrapStep`` sequence inside the destination
directory.  Steps run strictly in order and each must succeed before the next
one starts; the first failure raises ``BootstrapError`` and the remaining
steps are skipped.  Nothing is retried or rolled back.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from htmx_starter.errors import BootstrapError
from htmx_starter.scaffolder.registry import BootstrapStep, RunCommand, WriteFile
from htmx_starter.utils import console, run_command


@dataclass
class StepResult:
    """Record of one completed step."""

    index: int
    summary: str
    detail: str = ""


class BootstrapRunner:
    """Executes bootstrap steps for a freshly materialized template.

    Attributes:
        destination: Directory commands run in and files are written to.
        project_name: Substituted for ``{project_name}`` in command arguments.
        stack: Stack label carried on errors for diagnostics.
    """

    def __init__(self, destination: str | Path, project_name: str, stack: str = "") -> None:
        self.destination = Path(destination)
        self.project_name = project_name
        self.stack = stack

    async def run(self, steps: Sequence[BootstrapStep]) -> list[StepResult]:
        """Run *steps* in order.

        Returns:
            One ``StepResult`` per step, in execution order.

        Raises:
            BootstrapError: For the first step that fails, with its 1-based index.
        """
        results: list[StepResult] = []
        for index, step in enumerate(steps, start=1):
            console.print(f"  [cyan]>[/cyan] [{index}/{len(steps)}] {step.summary}")
            if isinstance(step, RunCommand):
                result = await self._run_command(index, step)
            elif isinstance(step, WriteFile):
                result = await self._write_file(index, step)
            else:
                raise BootstrapError(index, repr(step), "unsupported step type", stack=self.stack)
            results.append(result)
        return results

    async def _run_command(self, index: int, step: RunCommand) -> StepResult:
        argv = step.argv(self.project_name)
        cmd_str = " ".join(argv)
        try:
            returncode = await run_command(argv, cwd=self.destination)
        except FileNotFoundError as exc:
            # The same error is raised for a missing cwd and a missing executable.
            if not self.destination.is_dir():
                reason = f"working directory '{self.destination}' does not exist"
            else:
                reason = f"executable '{step.executable}' not found on PATH"
            raise BootstrapError(index, step.summary, reason, stack=self.stack) from exc
        except OSError as exc:
            raise BootstrapError(index, step.summary, exc, stack=self.stack) from exc

        if returncode != 0:
            raise BootstrapError(
                index,
                step.summary,
                f"'{cmd_str}' exited with status {returncode}",
                stack=self.stack,
            )
        return StepResult(index=index, summary=step.summary, detail=cmd_str)

    async def _write_file(self, index: int, step: WriteFile) -> StepResult:
        target = self.destination / step.path
        try:
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_text, step.content, "utf-8")
        except OSError as exc:
            raise BootstrapError(index, step.summary, exc, stack=self.stack) from exc
        return StepResult(index=index, summary=step.summary, detail=str(target))
