"""Routing of filesystem change sets to guard change tasks."""

from __future__ import annotations

from guard_runner.guard import Guard
from guard_runner.registry import Registry
from guard_runner.runner.models import (
    CHANGE_TASK_FALLBACKS,
    ChangeCategory,
    ChangeSet,
    ScopeRequest,
    TaskKind,
    TaskLogger,
    TaskOutcome,
)
from guard_runner.runner.scope import ScopeResolver
from guard_runner.runner.supervisor import SupervisedExecutor
from guard_runner.watcher import Watcher


class ChangeRouter:
    """Runs the most specific change task each guard implements."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        registry: Registry,
        watcher: Watcher,
        scope_resolver: ScopeResolver,
        executor: SupervisedExecutor,
        logger: TaskLogger,
    ) -> None:
        self.registry = registry
        self.watcher = watcher
        self.scope_resolver = scope_resolver
        self.executor = executor
        self.logger = logger

    def route_changes(
        self,
        change_set: ChangeSet,
        scope: ScopeRequest | None = None,
    ) -> list[TaskOutcome]:
        outcomes: list[TaskOutcome] = []
        if change_set.is_empty:
            return outcomes

        def _visit(guard: Guard) -> None:
            self.route_guard(guard, change_set, outcomes)

        self.scope_resolver.for_each_guard_in_scope(scope or ScopeRequest(), _visit)
        return outcomes

    def route_guard(
        self,
        guard: Guard,
        change_set: ChangeSet,
        outcomes: list[TaskOutcome] | None = None,
    ) -> list[TaskOutcome]:
        """Route each non-empty change category to ``guard``.

        Outcomes are appended to ``outcomes`` as each category finishes, so
        they survive a later ``TaskFailed`` escalating to the group boundary.
        """

        if outcomes is None:
            outcomes = []
        for category in ChangeCategory:
            paths = change_set.paths_for(category)
            if not paths:
                continue
            if not self.registry.contains(guard):
                break
            matched = self.watcher.match_files(guard, paths)
            if not matched:
                continue
            outcome = self.run_first_task_found(guard, CHANGE_TASK_FALLBACKS[category], matched)
            if outcome is not None:
                outcomes.append(outcome)
        return outcomes

    def run_first_task_found(
        self,
        guard: Guard,
        tasks: tuple[TaskKind, ...],
        paths: list[str],
    ) -> TaskOutcome | None:
        """Try ``tasks`` in order until one is implemented."""

        for task in tasks:
            self.logger.debug("Trying to run %s#%s with %r", type(guard).__name__, task.value, paths)
            try:
                return self.executor.run_supervised(guard, task, paths)
            except NotImplementedError:
                continue
        return None
