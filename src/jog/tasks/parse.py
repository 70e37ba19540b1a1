"""Line-oriented jogfile parser.

Grammar::

    # comment                 skipped while waiting for a header
    name [param ...] [...]    header, must start at column 0
        script line           body: indented or blank lines after the header

A trailing ``...`` on the header lets the task take extra arguments, which
are passed to the shell as positional parameters.
"""

from __future__ import annotations

import textwrap
from collections.abc import Iterator
from pathlib import Path

from jog import log
from jog.config import REST_MARKER
from jog.errors import ParseError
from jog.tasks.model import Task


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_indented(line: str) -> bool:
    return line[:1].isspace()


class _Lines:
    """Numbered line cursor with one line of lookahead."""

    def __init__(self, text: str) -> None:
        # Only "\n" ends a line; other Unicode line breaks are ordinary text.
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        self._lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        self._pos = 0

    def peek(self) -> str | None:
        if self._pos < len(self._lines):
            return self._lines[self._pos]
        return None

    def next(self) -> tuple[int, str]:
        line = self._lines[self._pos]
        self._pos += 1
        return self._pos, line


def _skip_comments(lines: _Lines) -> None:
    while (line := lines.peek()) is not None and (_is_blank(line) or line.startswith("#")):
        lines.next()


def _read_body(lines: _Lines) -> str:
    body: list[str] = []
    while (line := lines.peek()) is not None and (line == "" or _is_indented(line)):
        lines.next()
        body.append(f"{line}\n")
    return textwrap.dedent("".join(body))


def _parse_header(header: str, path: Path, line_no: int) -> tuple[str, tuple[str, ...], bool]:
    if _is_indented(header):
        raise ParseError("malformed task: indented header", path, line_no)

    name, *params = header.split()
    rest = bool(params) and params[-1] == REST_MARKER
    if rest:
        params.pop()
    return name, tuple(params), rest


def iter_tasks(text: str, path: Path) -> Iterator[Task]:
    """Yield tasks from jogfile *text* in declaration order."""
    lines = _Lines(text)
    while True:
        _skip_comments(lines)
        if lines.peek() is None:
            return
        line_no, header = lines.next()
        name, params, rest = _parse_header(header, path, line_no)
        body = _read_body(lines)
        log.debug(f"{path}:{line_no}: parsed task '{name}' (arity {len(params)}{'+' if rest else ''})")
        yield Task(
            name=name,
            params=params,
            rest=rest,
            body=body,
            path=path,
            line_no=line_no,
        )


def parse_tasks(text: str, path: Path) -> list[Task]:
    """Parse the full text of one jogfile into its ordered task list."""
    return list(iter_tasks(text, path))
