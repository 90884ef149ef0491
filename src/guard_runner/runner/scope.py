"""Scope resolution with group-level failure boundaries."""

from __future__ import annotations

from collections.abc import Callable

from guard_runner.guard import Guard
from guard_runner.registry import Registry
from guard_runner.runner.errors import TaskFailed
from guard_runner.runner.models import Group, ScopeRequest, TaskLogger
from guard_runner.runner.policy import GroupBoundaries


class ScopeResolver:
    """Expands a scope request into the guards to visit."""

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

    def for_each_guard_in_scope(
        self,
        scope: ScopeRequest,
        visit: Callable[[Guard], None],
    ) -> None:
        """Call ``visit`` for every guard in ``scope``, in registry order.

        A single-guard scope is visited directly unless that guard was
        removed from the registry. Otherwise each group gets
        its own boundary: an escalated ``TaskFailed`` skips the rest of that
        group only. Guards removed earlier in the call are not visited.
        """

        if scope.guard is not None:
            if not self.registry.is_removed(scope.guard):
                visit(scope.guard)
            return

        for group in self._target_groups(scope):
            try:
                with self.group_boundaries.installed():
                    for guard in self.registry.guards(group=group.name):
                        if not self.registry.contains(guard):
                            continue
                        visit(guard)
            except TaskFailed as signal:
                self.logger.debug("Group %s halted: %s", group.name, signal)

    def _target_groups(self, scope: ScopeRequest) -> list[Group]:
        if scope.group is None:
            return self.registry.groups()
        if isinstance(scope.group, Group):
            return [scope.group]
        group = self.registry.group(scope.group)
        if group is None:
            raise ValueError(f"Unknown group: {scope.group!r}")
        return [group]
