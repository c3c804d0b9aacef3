"""Shared pytest fixtures for the htmx-starter test suite.

Provides reusable fixtures for:
- Template trees and empty destination directories
- Configs pointing at those trees
- Mock subprocess helpers that record every invocation
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from htmx_starter.config import Config


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

GO_MOD_TMPL = "module {{ name }}\n\ngo 1.22\n"


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A templates root with one small tree per stack.

    - ``go/`` holds a single ``go.mod.tmpl``.
    - ``rust/`` is nested two levels deep and includes an empty directory.
    - ``typescript/`` holds ``src/main.ts``.
    """
    root = tmp_path / "templates"

    go = root / "go"
    go.mkdir(parents=True)
    (go / "go.mod.tmpl").write_text(GO_MOD_TMPL, encoding="utf-8")

    rust = root / "rust"
    (rust / "src" / "handlers").mkdir(parents=True)
    (rust / "static").mkdir()
    (rust / "Cargo.toml").write_text('[package]\nname = "demo"\n', encoding="utf-8")
    (rust / "src" / "main.rs").write_text("fn main() {}\n", encoding="utf-8")
    (rust / "src" / "handlers" / "mod.rs").write_text("pub mod posts;\n", encoding="utf-8")
    (rust / "src" / "handlers" / "logo.bin").write_bytes(bytes(range(256)))

    ts = root / "typescript"
    (ts / "src").mkdir(parents=True)
    (ts / "src" / "main.ts").write_text("console.log('hi');\n", encoding="utf-8")

    return root


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Empty destination directory (auto-cleanup)."""
    dest = tmp_path / "workdir"
    dest.mkdir()
    return dest


@pytest.fixture
def run_config(templates_root: Path, workdir: Path) -> Config:
    """Config pointing at the fixture templates and destination."""
    return Config(templates_dir=templates_root, destination=workdir)


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def recording_exec(mock_subprocess):
    """Replacement for ``asyncio.create_subprocess_exec`` that records calls.

    Returns a ``(fake_exec, calls)`` pair.  ``calls`` receives one
    ``(argv, kwargs)`` tuple per invocation.  Return codes are taken from
    ``fake_exec.returncodes`` in order (default 0); a ``None`` entry raises
    ``FileNotFoundError`` as a missing executable would.
    """
    calls: list[tuple[list[str], dict[str, Any]]] = []

    async def fake_exec(*argv: str, **kwargs: Any) -> AsyncMock:
        calls.append((list(argv), kwargs))
        codes = fake_exec.returncodes
        code = codes[len(calls) - 1] if len(calls) <= len(codes) else 0
        if code is None:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        return mock_subprocess(returncode=code)

    fake_exec.returncodes = []
    return fake_exec, calls
