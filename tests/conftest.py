"""Shared fixtures for jog tests.

File handling in tests:
- Use tmp_path for any directory or file creation so tests are isolated and cleaned up.
- Jogfiles are written as UTF-8; missing directories are created.
"""

from __future__ import annotations

import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from jog.config import Config
from jog.tasks.model import Jogfile, Task

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
SHELL = "/bin/sh"


@pytest.fixture(autouse=True)
def clean_jog_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from a surrounding jog run and pin the shell."""
    for var in ("JOG_DEPTH", "JOG_MAX_DEPTH", "JOG_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SHELL", SHELL)


def _write_jogfile(directory: Path, text: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "jogfile"
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def write_jogfile():
    """Factory fixture: write a (dedented) jogfile into a directory."""
    return _write_jogfile


def _make_task(
    name: str,
    params: tuple[str, ...] | list[str] = (),
    rest: bool = False,
    body: str = "",
    line_no: int = 1,
    path: Path | None = None,
) -> Task:
    return Task(
        name=name,
        params=tuple(params),
        rest=rest,
        body=body,
        path=path or Path("jogfile"),
        line_no=line_no,
    )


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances."""
    return _make_task


@pytest.fixture
def shell_config() -> Config:
    """An invocation context running /bin/sh with only PATH inherited."""
    return Config(shell=SHELL, environ={"PATH": os.environ.get("PATH", "/usr/bin:/bin")})


def _make_jogfile(path: Path, *tasks: Task, distance: int = 0) -> Jogfile:
    return Jogfile(path=path, tasks=tuple(tasks), distance=distance)


@pytest.fixture
def make_jogfile():
    """Factory fixture that creates Jogfile instances from tasks."""
    return _make_jogfile


def _run_cli(
    args: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    timeout: int = 60,
) -> subprocess.CompletedProcess:
    """Run jog as a subprocess. Use when the task itself must write to real stdio."""
    child_env = dict(os.environ)
    child_env.update(env or {})
    child_env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), child_env.get("PYTHONPATH", "")) if p
    )
    return subprocess.run(
        [sys.executable, "-m", "jog", *args],
        cwd=cwd,
        env=child_env,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout,
    )


@pytest.fixture
def run_cli():
    """Factory fixture running ``python -m jog`` against the source tree."""
    return _run_cli
