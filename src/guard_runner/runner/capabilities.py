"""Capability lookup for guard tasks."""

from __future__ import annotations

from guard_runner.guard import Guard
from guard_runner.runner.errors import TaskNotImplemented
from guard_runner.runner.models import TaskKind


def supports(guard: Guard, task: TaskKind) -> bool:
    """Return whether ``guard`` declares an implementation of ``task``."""

    return task in guard.supported_tasks()


def require_support(guard: Guard, task: TaskKind) -> None:
    """Raise ``TaskNotImplemented`` when ``guard`` lacks ``task``.

    Absence is reported through ``NotImplementedError`` so callers can walk a
    fallback chain; it is never a guard failure.
    """

    if not supports(guard, task):
        raise TaskNotImplemented(guard_name=type(guard).__name__, task=task.value)
