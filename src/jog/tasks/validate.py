"""Reject task definitions that can never be reached."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from jog.errors import ValidationError
from jog.tasks.model import Task


def is_redundant(earlier: Task, later: Task) -> bool:
    """Return ``True`` when every call matching *later* already matches *earlier*.

    Both tasks are assumed to share a name, with *earlier* declared first.
    """
    if earlier.rest:
        return earlier.arity <= later.arity
    if later.rest:
        return False
    return earlier.arity == later.arity


def find_redundant(tasks: Sequence[Task]) -> tuple[Task, Task] | None:
    """Return the first ``(earlier, later)`` pair where *later* is unreachable."""
    for j, later in enumerate(tasks):
        for earlier in tasks[:j]:
            if earlier.name == later.name and is_redundant(earlier, later):
                return earlier, later
    return None


def validate(path: Path, tasks: Sequence[Task]) -> None:
    """Raise :class:`ValidationError` if any definition in *tasks* is unreachable."""
    pair = find_redundant(tasks)
    if pair is None:
        return
    earlier, later = pair
    raise ValidationError(path, later.line_no, later.name, earlier.line_no)
