"""Logging utilities with colored output via Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, emoji=False, soft_wrap=True)
_err_console = Console(highlight=False, emoji=False, soft_wrap=True, stderr=True)

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = enabled


def warn(msg: str) -> None:
    _err_console.print(f"[bold yellow]warning[/bold yellow]: {escape(msg)}")


def error(msg: str) -> None:
    _err_console.print(f"[bold red]error[/bold red]: {escape(msg)}")


def debug(msg: str) -> None:
    if _verbose:
        _err_console.print(f"[dim]debug: {escape(msg)}[/dim]")
