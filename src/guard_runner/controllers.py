"""Controllers for guard runner CLI commands."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass

from guard_runner.config import Settings
from guard_runner.registry import Registry
from guard_runner.runner.models import ScopeRequest, TaskKind, TaskOutcome
from guard_runner.runner.runner import Runner


@dataclass(slots=True)
class RunTaskCommand:
    """CLI input for running a primary task."""

    task: str
    guard: str | None
    group: str | None
    guardfile: str | None


@dataclass(slots=True)
class RouteChangesCommand:
    """CLI input for routing a change set."""

    modified: tuple[str, ...]
    added: tuple[str, ...]
    removed: tuple[str, ...]
    guardfile: str | None


@dataclass(slots=True)
class ListGuardsCommand:
    """CLI input for registry listing."""

    guardfile: str | None


class RunnerCliController:
    """Builds a registry from the guardfile and drives the runner."""

    def run_task(self, command: RunTaskCommand) -> list[str]:
        if command.guard is not None and command.group is not None:
            raise ValueError("Use either --guard or --group, not both.")
        task = TaskKind(command.task)
        registry = _load_registry(Settings.from_env(guardfile=command.guardfile))
        runner = Runner(registry=registry)

        if command.guard is not None:
            guard = registry.guard(command.guard)
            if guard is None:
                raise ValueError(f"Unknown guard: {command.guard!r}")
            outcomes = runner.run_with_scope(task, ScopeRequest(guard=guard))
        elif command.group is not None:
            if registry.group(command.group) is None:
                raise ValueError(f"Unknown group: {command.group!r}")
            outcomes = runner.run_with_scope(task, ScopeRequest(group=command.group))
        else:
            outcomes = runner.run(task)
        return _outcome_lines(outcomes, empty=f"No guard ran <{task.value}>.")

    def route_changes(self, command: RouteChangesCommand) -> list[str]:
        registry = _load_registry(Settings.from_env(guardfile=command.guardfile))
        outcomes = Runner(registry=registry).run_on_changes(
            modified=command.modified,
            added=command.added,
            removed=command.removed,
        )
        return _outcome_lines(outcomes, empty="No guard matched the changed paths.")

    def list_guards(self, command: ListGuardsCommand) -> list[str]:
        registry = _load_registry(Settings.from_env(guardfile=command.guardfile))
        lines: list[str] = []
        for group in registry.groups():
            halt = " (halt on fail)" if group.options.halt_on_fail else ""
            lines.append(f"{group.name}{halt}")
            for guard in registry.guards(group=group.name):
                tasks = ", ".join(sorted(task.value for task in guard.supported_tasks()))
                lines.append(f"  {guard.name}: {tasks or '-'}")
        return lines


def _load_registry(settings: Settings) -> Registry:
    registry = Registry(
        default_group=settings.default_group,
        default_halt_on_fail=settings.halt_on_fail,
    )
    if settings.guardfile is not None:
        _resolve_guardfile(settings.guardfile)(registry)
    return registry


def _resolve_guardfile(value: str) -> Callable[[Registry], object]:
    module_name, _, attribute = value.partition(":")
    try:
        module = importlib.import_module(module_name.strip())
    except ImportError as error:
        raise ValueError(f"Cannot import guardfile module {module_name!r}: {error}") from error
    configure = getattr(module, attribute.strip(), None)
    if not callable(configure):
        raise ValueError(f"Guardfile {value!r} does not name a callable.")
    return configure


def _outcome_lines(outcomes: list[TaskOutcome], *, empty: str) -> list[str]:
    if not outcomes:
        return [empty]
    return [outcome.describe() for outcome in outcomes]
