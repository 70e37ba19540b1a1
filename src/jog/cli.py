"""jog CLI: run a task defined in a jogfile.

Installed as ``jog`` console_script; also runnable as ``python -m jog``.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
from rich.markup import escape

from jog import __version__
from jog.config import FALLBACK_EXIT_CODE, VERBOSE_VAR, env_flag
from jog.errors import JogError
from jog.tasks.model import Jogfile, Task


CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"],
    # Everything after the task name belongs to the task
    allow_interspersed_args=False,
    ignore_unknown_options=True,
)

EPILOG = (
    "Tasks are run in $SHELL. Arguments are passed as environment variables. "
    "For tasks defined with a final parameter of '...', extra arguments are "
    "passed as positional arguments."
)


def _print_tasks(pairs: list[tuple[Jogfile, Task]]) -> None:
    from jog import log as jlog

    show_paths = len({jogfile.path for jogfile, _ in pairs}) > 1
    current: Path | None = None
    for jogfile, task in pairs:
        if show_paths and jogfile.path != current:
            if current is not None:
                jlog.console.print()
            jlog.console.print(f"[dim]{escape(str(jogfile.path))}[/dim]")
            current = jogfile.path
        params = "".join(f" {escape(p)}" for p in task.params)
        rest = " ..." if task.rest else ""
        jlog.console.print(f"[bold]{escape(task.name)}[/bold]{params}{rest}")


@click.command(context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
@click.option("-l", "--list", "list_tasks", is_flag=True, help="List tasks and their parameters")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
@click.version_option(__version__, "-V", "--version", prog_name="jog", message="%(prog)s %(version)s")
@click.argument("task", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(
    ctx: click.Context,
    list_tasks: bool,
    verbose: bool,
    task: str | None,
    args: tuple[str, ...],
) -> None:
    """Run a task defined in a jogfile.

    \b
    Arguments:
      TASK  The name of the task to run
      ARGS  Arguments to pass to the task

    \b
    EXAMPLES:
      jog --list            # Show tasks from every jogfile up the tree
      jog build             # Run the 'build' task
      jog greet world       # Bind 'world' to the first parameter of 'greet'
    """
    from jog import log as jlog

    jlog.set_verbose(verbose or env_flag(os.environ, VERBOSE_VAR))

    if task is not None and task.startswith("-"):
        jlog.error(f"unknown option '{task}'")
        sys.exit(FALLBACK_EXIT_CODE)

    try:
        if list_tasks:
            from jog.tasks.io import list_tasks as discover

            _print_tasks(discover(Path.cwd(), task))
            ctx.exit(0)

        if task is None:
            click.echo(ctx.get_help())
            ctx.exit(0)

        from jog.runner import run_task

        # JOG_DEPTH and friends are only read on the run path
        code = run_task(Path.cwd(), task, list(args))
    except JogError as err:
        jlog.error(str(err))
        sys.exit(FALLBACK_EXIT_CODE)

    sys.exit(code)
