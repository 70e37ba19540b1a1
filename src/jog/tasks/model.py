"""Task and Jogfile data models used across parsing, resolution and invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jog.config import REST_MARKER


@dataclass(frozen=True)
class Task:
    name: str
    params: tuple[str, ...] = ()
    rest: bool = False
    body: str = ""
    path: Path | None = None
    line_no: int = 0

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def arity_label(self) -> str:
        """Fixed arity, with a trailing ``+`` when extra arguments are accepted."""
        return f"{self.arity}+" if self.rest else str(self.arity)

    @property
    def signature(self) -> str:
        parts = [self.name, *self.params]
        if self.rest:
            parts.append(REST_MARKER)
        return " ".join(parts)

    def accepts(self, arg_count: int) -> bool:
        """Return ``True`` when a call with *arg_count* arguments matches this task."""
        if self.rest:
            return self.arity <= arg_count
        return self.arity == arg_count


@dataclass(frozen=True)
class Jogfile:
    path: Path
    tasks: tuple[Task, ...] = field(default_factory=tuple)
    distance: int = 0

    def named(self, name: str) -> list[Task]:
        return [t for t in self.tasks if t.name == name]
