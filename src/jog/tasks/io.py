"""Locate, read and list jogfiles from a directory and its ancestors."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from jog import log
from jog.config import JOGFILE_NAME
from jog.errors import DiscoveryError, ParseError
from jog.io_utils import PathLike, read_text
from jog.tasks.model import Jogfile, Task
from jog.tasks.parse import parse_tasks
from jog.tasks.validate import validate


def find_jogfile_paths(start_dir: PathLike, filename: str = JOGFILE_NAME) -> list[Path]:
    """Return every jogfile from *start_dir* upwards, nearest first.

    Raises :class:`DiscoveryError` when neither *start_dir* nor any ancestor
    contains one.
    """
    start = Path(start_dir).absolute()
    found: list[Path] = []
    for directory in (start, *start.parents):
        candidate = directory / filename
        try:
            if candidate.is_file():
                found.append(candidate)
        except OSError as exc:
            raise DiscoveryError(f"cannot access {filename}: {exc.strerror or exc}", candidate) from exc
    if not found:
        raise DiscoveryError(f"{filename} not found")
    log.debug(f"found {len(found)} {filename}(s): {', '.join(str(p) for p in found)}")
    return found


def load_jogfile(path: Path, distance: int = 0) -> Jogfile:
    """Read, parse and validate one jogfile."""
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise ParseError(f"cannot read jogfile: {reason}", path) from exc

    tasks = parse_tasks(text, path)
    validate(path, tasks)
    return Jogfile(path=path, tasks=tuple(tasks), distance=distance)


def iter_jogfiles(start_dir: PathLike, filename: str = JOGFILE_NAME) -> Iterator[Jogfile]:
    """Yield parsed jogfiles nearest first.

    Discovery happens before the first item is requested, so a missing
    jogfile is reported immediately; each file is parsed only when reached.
    """
    start = Path(start_dir).absolute()
    paths = find_jogfile_paths(start, filename)

    def _load() -> Iterator[Jogfile]:
        for path in paths:
            # Number of directory levels between the start and the jogfile
            yield load_jogfile(path, len(start.parts) - len(path.parent.parts))

    return _load()


def load_jogfiles(start_dir: PathLike, filename: str = JOGFILE_NAME) -> list[Jogfile]:
    return list(iter_jogfiles(start_dir, filename))


def list_tasks(start_dir: PathLike, name: str | None = None) -> list[tuple[Jogfile, Task]]:
    """Return every discovered ``(jogfile, task)`` pair, optionally only tasks named *name*."""
    return [
        (jogfile, task)
        for jogfile in load_jogfiles(start_dir)
        for task in jogfile.tasks
        if name is None or task.name == name
    ]
