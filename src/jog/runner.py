"""Runner: resolves a task and executes its body in the user's shell."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from jog import log
from jog.config import DEPTH_VAR, SHELL_VAR, Config
from jog.errors import EnvironmentVariableError, ProcessError, RecursionLimitExceeded
from jog.io_utils import PathLike
from jog.resolver import require_match, resolve
from jog.tasks.io import iter_jogfiles
from jog.tasks.model import Jogfile, Task


def resolve_shell(cfg: Config) -> str:
    """Return an executable path for ``$SHELL``."""
    shell = cfg.shell.strip()
    if not shell:
        raise EnvironmentVariableError(f"{SHELL_VAR} is not set; cannot run tasks")
    resolved = shutil.which(shell, path=cfg.environ.get("PATH"))
    if resolved is None:
        raise EnvironmentVariableError(f"{SHELL_VAR} is not an executable: '{shell}'")
    return resolved


def build_env(task: Task, args: Sequence[str], cfg: Config) -> dict[str, str]:
    """Child environment: parameters bound to raw argument values, depth incremented."""
    env = dict(cfg.environ)
    seen: set[str] = set()
    for param, value in zip(task.params, args):
        if param in seen:
            log.warn(f"parameter '{param}' of task '{task.name}' is declared twice; the last argument wins")
        seen.add(param)
        env[param] = value
    env[DEPTH_VAR] = str(cfg.depth + 1)
    return env


def build_cmd(shell: str, jogfile: Jogfile, task: Task, args: Sequence[str]) -> list[str]:
    # $0 is the jogfile path; only a rest task ever has leftover arguments
    return [shell, "-c", task.body, str(jogfile.path), *args[task.arity:]]


def exit_code(returncode: int | None) -> int:
    """Translate a child's status: exit code verbatim, signal number if killed."""
    if returncode is None:
        raise ProcessError("task terminated without an exit status")
    if returncode < 0:
        return -returncode
    return returncode


def _wait(proc: subprocess.Popen[bytes]) -> int | None:
    # Ctrl-C reaches the child through the terminal; keep waiting for it to exit.
    while True:
        try:
            return proc.wait()
        except KeyboardInterrupt:
            log.debug("interrupt received, waiting for task to exit")


def invoke(jogfile: Jogfile, task: Task, args: Sequence[str], cfg: Config) -> int:
    """Run *task* with *args* and return the translated exit code."""
    if cfg.depth > cfg.max_depth:
        raise RecursionLimitExceeded(jogfile.path, task.line_no, task.name, len(args))

    shell = resolve_shell(cfg)
    env = build_env(task, args, cfg)
    cmd = build_cmd(shell, jogfile, task, args)
    log.debug(f"running '{task.signature}' from {jogfile.path}:{task.line_no} in {shell} (depth {cfg.depth + 1})")

    try:
        proc = subprocess.Popen(cmd, env=env)
    except OSError as exc:
        raise ProcessError(f"failed to run {shell}: {exc.strerror or exc}", jogfile.path, task.line_no) from exc

    return exit_code(_wait(proc))


def run_task(
    start_dir: PathLike,
    name: str,
    args: Sequence[str],
    environ: Mapping[str, str] | None = None,
) -> int:
    """Discover, resolve and run ``name args...`` from *start_dir*.

    Returns the task's exit code; raises a :class:`~jog.errors.JogError`
    on any failure before or while spawning it.
    """
    cfg = Config.from_env(environ)
    jogfile, task = require_match(resolve(iter_jogfiles(Path(start_dir)), name, args))
    return invoke(jogfile, task, args, cfg)
