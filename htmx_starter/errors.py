"""Error types raised by the scaffolding stages.

Every stage surfaces a typed failure; the orchestrator turns any of them into
a single diagnostic and a non-zero exit status.

Usage:
    raise CopyError("Go", path=Path("templates/go"), cause=exc)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class StarterError(Exception):
    """Base class for failures that abort a scaffolding run."""

    stage = "unknown"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form for diagnostics."""
        return {
            "error": type(self).__name__,
            "stage": self.stage,
            "message": self.message,
            **{k: str(v) for k, v in self.context.items()},
        }


class InputError(StarterError):
    """The interactive prompt failed, was cancelled, or got no valid selection."""

    stage = "selecting"


class CopyError(StarterError):
    """Template-tree materialization failed."""

    stage = "materializing"

    def __init__(self, stack: str, path: Path | str, cause: BaseException) -> None:
        self.stack = stack
        self.path = Path(path)
        self.cause = cause
        super().__init__(
            f"Failed to copy template files for {stack} at {self.path}: {cause}",
            stack=stack,
            path=self.path,
            cause=cause,
        )


class BootstrapError(StarterError):
    """A post-copy bootstrap step failed.

    ``index`` is 1-based, matching the order steps were declared in.
    """

    stage = "bootstrapping"

    def __init__(
        self,
        index: int,
        description: str,
        cause: BaseException | str,
        stack: str = "",
    ) -> None:
        self.index = index
        self.description = description
        self.cause = cause
        self.stack = stack
        super().__init__(
            f"Bootstrap step {index} ({description}) failed: {cause}",
            index=index,
            description=description,
            cause=cause,
        )
