"""Supervised execution of one task on one guard."""

from __future__ import annotations

import traceback
from typing import Any

from guard_runner.guard import Guard
from guard_runner.registry import Registry
from guard_runner.runner.capabilities import require_support
from guard_runner.runner.errors import TaskFailed
from guard_runner.runner.models import (
    Boundary,
    OutcomeStatus,
    TaskKind,
    TaskLogger,
    TaskOutcome,
)
from guard_runner.runner.policy import GroupBoundaries, boundary_for


class SupervisedExecutor:
    """Runs a task between its begin/end hooks and contains guard failures."""

    def __init__(
        self,
        *,
        registry: Registry,
        logger: TaskLogger,
        group_boundaries: GroupBoundaries,
    ) -> None:
        self.registry = registry
        self.logger = logger
        self.group_boundaries = group_boundaries

    def boundary_for(self, guard: Guard) -> Boundary:
        """Effective boundary for ``guard``.

        Escalation has no target outside a group scope, so a single-guard run
        contains ``TaskFailed`` even when the guard's group halts on failure.
        """

        boundary = boundary_for(guard, self.registry)
        if boundary is Boundary.ESCALATE and not self.group_boundaries.active:
            return Boundary.CONTAIN
        return boundary

    def run_supervised(self, guard: Guard, task: TaskKind, *args: Any) -> TaskOutcome:
        """Run ``task`` on ``guard``.

        ``NotImplementedError`` propagates unchanged. ``TaskFailed`` is
        contained here or re-raised toward the group boundary. Any other
        exception fires the guard and is returned as the outcome.
        """

        boundary = self.boundary_for(guard)
        try:
            require_support(guard, task)
            guard.hook(f"{task.value}_begin", *args)
            result = getattr(guard, task.value)(*args)
            guard.hook(f"{task.value}_end", result)
        except NotImplementedError:
            raise
        except TaskFailed as signal:
            if boundary is Boundary.ESCALATE:
                raise
            self.logger.debug(
                "%s failed its <%s>: %s", type(guard).__name__, task.value, signal
            )
            return TaskOutcome(
                guard=guard,
                task=task,
                status=OutcomeStatus.HALTED,
                result=signal.value,
                error=signal,
            )
        except Exception as error:  # noqa: BLE001
            self._fire(guard, task, error)
            return TaskOutcome(guard=guard, task=task, status=OutcomeStatus.FAULTED, error=error)
        return TaskOutcome(guard=guard, task=task, status=OutcomeStatus.SUCCEEDED, result=result)

    def _fire(self, guard: Guard, task: TaskKind, error: Exception) -> None:
        guard_class = type(guard).__name__
        self.logger.error(
            "%s failed to achieve its <%s>, exception was:\n%s: %s\n%s",
            guard_class,
            task.value,
            type(error).__name__,
            error,
            "".join(traceback.format_tb(error.__traceback__)).rstrip(),
        )
        self.registry.remove(guard)
        self.logger.info("%s has just been fired", guard_class)
