"""Top-level runner composing scope, supervision and change routing."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from guard_runner.guard import Guard
from guard_runner.registry import Registry
from guard_runner.runner.changes import ChangeRouter
from guard_runner.runner.models import (
    ChangeSet,
    ScopeRequest,
    TaskKind,
    TaskLogger,
    TaskOutcome,
)
from guard_runner.runner.policy import GroupBoundaries
from guard_runner.runner.scope import ScopeResolver
from guard_runner.runner.supervisor import SupervisedExecutor
from guard_runner.watcher import Watcher

logger = logging.getLogger(__name__)


class Runner:
    """Runs guard tasks across registered groups."""

    def __init__(
        self,
        *,
        registry: Registry,
        watcher: Watcher | None = None,
        task_logger: TaskLogger | None = None,
    ) -> None:
        self.registry = registry
        self.watcher = watcher or Watcher()
        self.logger: TaskLogger = task_logger or logger
        group_boundaries = GroupBoundaries()
        self.executor = SupervisedExecutor(
            registry=registry,
            logger=self.logger,
            group_boundaries=group_boundaries,
        )
        self.scope_resolver = ScopeResolver(
            registry=registry,
            logger=self.logger,
            group_boundaries=group_boundaries,
        )
        self.change_router = ChangeRouter(
            registry=registry,
            watcher=self.watcher,
            scope_resolver=self.scope_resolver,
            executor=self.executor,
            logger=self.logger,
        )

    def run(self, task: TaskKind) -> list[TaskOutcome]:
        """Run ``task`` on every registered guard."""

        return self._run_in_scope(task, ScopeRequest())

    def run_with_scope(self, task: TaskKind, scope: ScopeRequest) -> list[TaskOutcome]:
        """Run ``task`` on the guard or group named by ``scope``."""

        with self.registry.within_preserved_state():
            return self._run_in_scope(task, scope)

    def run_on_changes(
        self,
        modified: Iterable[str] = (),
        added: Iterable[str] = (),
        removed: Iterable[str] = (),
    ) -> list[TaskOutcome]:
        """Run the matching change tasks for the given paths."""

        change_set = ChangeSet(
            modified=tuple(modified),
            added=tuple(added),
            removed=tuple(removed),
        )
        with self.registry.within_preserved_state():
            return self.change_router.route_changes(change_set)

    def _run_in_scope(self, task: TaskKind, scope: ScopeRequest) -> list[TaskOutcome]:
        outcomes: list[TaskOutcome] = []

        def _visit(guard: Guard) -> None:
            try:
                outcomes.append(self.executor.run_supervised(guard, task))
            except NotImplementedError:
                self.logger.debug("%s does not implement <%s>", type(guard).__name__, task.value)

        self.scope_resolver.for_each_guard_in_scope(scope, _visit)
        return outcomes
