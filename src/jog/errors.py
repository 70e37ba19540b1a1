"""Error taxonomy for task discovery, resolution and invocation.

Every error carries the jogfile path and line it concerns (when known) so the
CLI can render a single ``path:line: message`` diagnostic.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jog.tasks.model import Task


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


class JogError(Exception):
    """Base class for all errors raised by the jog core."""

    def __init__(self, message: str, path: Path | None = None, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        if self.line is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line}: {self.message}"


class DiscoveryError(JogError):
    """No jogfile in the starting directory or any of its ancestors."""


class ParseError(JogError):
    """A jogfile could not be read or contains a malformed header."""


class ValidationError(JogError):
    """An earlier definition makes a later same-named definition unreachable."""

    def __init__(self, path: Path, line: int, name: str, covered_by: int) -> None:
        super().__init__(
            f"redundant definition for '{name}', already covered by {path}:{covered_by}",
            path,
            line,
        )
        self.name = name
        self.covered_by = covered_by


class UnknownTaskError(JogError):
    """The requested task is not declared in any discovered jogfile."""

    def __init__(self, name: str, path: Path | None = None) -> None:
        super().__init__(f"unknown task '{name}'", path)
        self.name = name


class ArityMismatchError(JogError):
    """The task exists, but no definition accepts the given argument count."""

    def __init__(self, name: str, candidates: Sequence[Task], given: int, path: Path | None = None) -> None:
        super().__init__(mismatched_args_msg(name, candidates, given), path)
        self.name = name
        self.candidates = tuple(candidates)
        self.given = given


class RecursionLimitExceeded(JogError):
    """Nested jog invocations went deeper than the configured maximum."""

    def __init__(self, path: Path, line: int, name: str, given: int) -> None:
        super().__init__(
            f"maximum recursion depth exceeded running '{name}' with "
            f"{given} {_plural(given, 'argument', 'arguments')}",
            path,
            line,
        )
        self.name = name
        self.given = given


class EnvironmentVariableError(JogError):
    """A required environment variable is missing or holds an unusable value."""


class ProcessError(JogError):
    """The task shell could not be spawned or its exit status is unknown."""


def mismatched_args_msg(name: str, candidates: Sequence[Task], given: int) -> str:
    """Describe every accepted arity of *name* against the *given* count.

    Example: ``task 't' takes 1 or 2+ parameters, but 0 were given``.
    """
    labels = [task.arity_label for task in candidates]
    if len(labels) <= 2:
        arities = " or ".join(labels)
    else:
        arities = ", ".join(labels[:-1]) + ", or " + labels[-1]

    singular = len(labels) == 1 and labels[0] == "1"
    parameters = "parameter" if singular else "parameters"
    was = _plural(given, "was", "were")
    return f"task '{name}' takes {arities} {parameters}, but {given} {was} given"
