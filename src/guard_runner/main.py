"""CLI entrypoint for guard-runner."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import rich_click as click

from guard_runner import __version__
from guard_runner.config import Settings
from guard_runner.controllers import (
    ListGuardsCommand,
    RouteChangesCommand,
    RunnerCliController,
    RunTaskCommand,
)
from guard_runner.runner.models import PRIMARY_TASKS

click.rich_click.USE_MARKDOWN = True
RUNNER_CONTROLLER = RunnerCliController()

_GUARDFILE_HELP = (
    "Guard configuration as '<module>:<callable>'; the callable receives the registry. "
    "If omitted, GUARD_RUNNER_GUARDFILE is used."
)


@click.group()
@click.version_option(version=__version__, prog_name="guard-runner")
@click.option("--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def guard_runner(verbose: bool) -> None:
    """Guard task runner CLI."""

    try:
        settings = Settings.from_env()
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


@guard_runner.command("run")
@click.argument("task", type=click.Choice([task.value for task in PRIMARY_TASKS]))
@click.option("--guard", "guard_name", default=None, help="Run only this guard.")
@click.option("--group", "group_name", default=None, help="Run only guards of this group.")
@click.option("--guardfile", default=None, help=_GUARDFILE_HELP)
def run_task(
    task: str,
    guard_name: str | None,
    group_name: str | None,
    guardfile: str | None,
) -> None:
    """Run a task on all guards or within a guard/group scope."""

    _emit_lines(
        _invoke(
            RUNNER_CONTROLLER.run_task,
            RunTaskCommand(task=task, guard=guard_name, group=group_name, guardfile=guardfile),
        ),
    )


@guard_runner.command("changes")
@click.option("--modified", multiple=True, help="Modified path. Can be repeated.")
@click.option("--added", multiple=True, help="Added path. Can be repeated.")
@click.option("--removed", multiple=True, help="Removed path. Can be repeated.")
@click.option("--guardfile", default=None, help=_GUARDFILE_HELP)
def route_changes(
    modified: tuple[str, ...],
    added: tuple[str, ...],
    removed: tuple[str, ...],
    guardfile: str | None,
) -> None:
    """Run the matching change tasks for a set of changed paths."""

    _emit_lines(
        _invoke(
            RUNNER_CONTROLLER.route_changes,
            RouteChangesCommand(
                modified=modified,
                added=added,
                removed=removed,
                guardfile=guardfile,
            ),
        ),
    )


@guard_runner.command("list")
@click.option("--guardfile", default=None, help=_GUARDFILE_HELP)
def list_guards(guardfile: str | None) -> None:
    """List groups and their guards."""

    _emit_lines(_invoke(RUNNER_CONTROLLER.list_guards, ListGuardsCommand(guardfile=guardfile)))


def _invoke(handler: Callable[[Any], list[str]], command: object) -> list[str]:
    try:
        return handler(command)
    except ValueError as error:
        raise click.ClickException(str(error)) from error


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    guard_runner()
