"""Recursive template materialization.

Copies a template tree into a destination directory, preserving relative
paths and file contents byte-for-byte.  Existing files are overwritten and
existing directories are merged.

Directories are created first, in walk order; files are then copied
concurrently in worker threads.  Every failure is collected into the
``CopyOutcome`` rather than stopping at the first one, and nothing written
before a failure is rolled back.  Re-running over a partial tree is safe
because copying identical content is idempotent.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class CopyOutcome:
    """Result of materializing one template tree."""

    source: Path
    destination: Path
    copied: list[Path] = field(default_factory=list)
    errors: list[tuple[Path, BaseException]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def failed_path(self) -> Path | None:
        """Path of the first failure, in walk order."""
        return self.errors[0][0] if self.errors else None

    @property
    def cause(self) -> BaseException | None:
        return self.errors[0][1] if self.errors else None


def _plan(source: Path, outcome: CopyOutcome) -> tuple[list[Path], list[Path]]:
    """Walk *source* and return ``(directories, files)`` as relative paths.

    Symlinked directories are followed; one that points back at a directory
    enclosing it is recorded as an error instead of recursing forever.
    """
    directories: list[Path] = []
    files: list[Path] = []

    def _on_error(exc: OSError) -> None:
        outcome.errors.append((Path(exc.filename or source), exc))

    for root, dirnames, filenames in os.walk(source, followlinks=True, onerror=_on_error):
        rel_root = Path(root).relative_to(source)
        real = os.path.realpath(root)
        ancestors = {
            os.path.realpath(source.joinpath(*rel_root.parts[:i]))
            for i in range(len(rel_root.parts))
        }
        if real in ancestors:
            outcome.errors.append(
                (Path(root), OSError(f"Symlink loop: {root} resolves to {real}"))
            )
            dirnames.clear()
            continue
        dirnames.sort()
        for name in dirnames:
            directories.append(rel_root / name)
        for name in sorted(filenames):
            files.append(rel_root / name)
    return directories, files


async def copy_tree(source: str | Path, destination: str | Path) -> CopyOutcome:
    """Copy every file and directory under *source* into *destination*.

    Args:
        source: Root of the template tree.  Must be an existing directory.
        destination: Directory to materialize into.  Created if missing.

    Returns:
        A ``CopyOutcome``.  ``outcome.ok`` is ``False`` when the source is
        missing, is not a directory, or any read or write failed.
    """
    source = Path(source)
    destination = Path(destination)
    outcome = CopyOutcome(source=source, destination=destination)

    if not source.exists():
        outcome.errors.append(
            (source, FileNotFoundError(f"Template directory not found: {source}"))
        )
        return outcome
    if not source.is_dir():
        outcome.errors.append(
            (source, NotADirectoryError(f"Template path is not a directory: {source}"))
        )
        return outcome

    directories, files = await asyncio.to_thread(_plan, source, outcome)
    if not outcome.ok:
        return outcome

    for rel in [Path("."), *directories]:
        target = destination / rel
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            outcome.errors.append((target, exc))
    if not outcome.ok:
        return outcome

    results = await asyncio.gather(
        *(
            asyncio.to_thread(shutil.copyfile, source / rel, destination / rel)
            for rel in files
        ),
        return_exceptions=True,
    )
    for rel, result in zip(files, results):
        if isinstance(result, BaseException):
            failed = getattr(result, "filename", None) or source / rel
            outcome.errors.append((Path(failed), result))
        else:
            outcome.copied.append(rel)

    return outcome
