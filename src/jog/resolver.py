"""Pick the single task definition that handles a requested call.

Jogfiles are scanned nearest first and tasks in declaration order; the first
definition whose arity accepts the arguments wins. A nearer definition that
does not fit does not hide a farther one that does.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from jog import log
from jog.errors import ArityMismatchError, UnknownTaskError
from jog.tasks.model import Jogfile, Task


@dataclass(frozen=True)
class Matched:
    jogfile: Jogfile
    task: Task


@dataclass(frozen=True)
class UnknownTask:
    name: str
    path: Path | None = None


@dataclass(frozen=True)
class ArityMismatch:
    name: str
    given: int
    candidates: tuple[Task, ...] = field(default_factory=tuple)

    @property
    def path(self) -> Path | None:
        return self.candidates[0].path if self.candidates else None


Resolution = Matched | UnknownTask | ArityMismatch


def resolve(jogfiles: Iterable[Jogfile], name: str, args: Sequence[str]) -> Resolution:
    """Resolve ``name args...`` against *jogfiles* (nearest first).

    *jogfiles* may be a lazy iterator: it is only advanced until a match is
    found.
    """
    candidates: list[Task] = []
    nearest: Path | None = None

    for jogfile in jogfiles:
        if nearest is None:
            nearest = jogfile.path
        for task in jogfile.named(name):
            candidates.append(task)
            if task.accepts(len(args)):
                log.debug(f"{jogfile.path}:{task.line_no}: '{task.signature}' matches {len(args)} argument(s)")
                return Matched(jogfile, task)

    if not candidates:
        return UnknownTask(name, nearest)
    return ArityMismatch(name, len(args), tuple(candidates))


def require_match(resolution: Resolution) -> tuple[Jogfile, Task]:
    """Return the matched ``(jogfile, task)`` or raise the matching error."""
    match resolution:
        case Matched(jogfile, task):
            return jogfile, task
        case UnknownTask(name, path):
            raise UnknownTaskError(name, path)
        case ArityMismatch(name=name, given=given, candidates=candidates):
            raise ArityMismatchError(name, candidates, given, resolution.path)
    raise TypeError(f"not a resolution: {resolution!r}")
