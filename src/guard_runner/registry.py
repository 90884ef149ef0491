"""In-memory registry of groups and guards."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from guard_runner.guard import Guard
from guard_runner.runner.models import Group, GroupOptions

logger = logging.getLogger(__name__)

DEFAULT_GROUP_NAME = "default"


class Registry:
    """Owns groups and guards; the runner only reads snapshots and removes.

    Guards whose group is unset are listed under the default group. Removal
    is permanent: a removed guard can never be registered again.
    """

    def __init__(
        self,
        *,
        default_group: str = DEFAULT_GROUP_NAME,
        default_halt_on_fail: bool = False,
    ) -> None:
        self.default_group = default_group
        self._groups: list[Group] = [
            Group(name=default_group, options=GroupOptions(halt_on_fail=default_halt_on_fail)),
        ]
        self._guards: list[Guard] = []
        self._removed: list[Guard] = []
        self._preserved_depth = 0

    def add_group(self, name: str, *, halt_on_fail: bool = False) -> Group:
        """Return the group named ``name``, creating it when missing."""

        existing = self.group(name)
        if existing is not None:
            return existing
        group = Group(name=name, options=GroupOptions(halt_on_fail=halt_on_fail))
        self._groups.append(group)
        return group

    def add_guard(self, guard: Guard) -> Guard:
        if self.is_removed(guard):
            raise ValueError(f"Guard {guard.name!r} was removed and cannot be re-added.")
        if any(existing is guard for existing in self._guards):
            return guard
        group_name = guard.group_name
        if group_name is not None and self.group(group_name) is None:
            raise ValueError(f"Unknown group {group_name!r} for guard {guard.name!r}.")
        self._guards.append(guard)
        return guard

    def groups(self) -> list[Group]:
        """Snapshot of registered groups in registration order."""

        return list(self._groups)

    def group(self, name: str) -> Group | None:
        for group in self._groups:
            if group.name == name:
                return group
        return None

    def guards(self, *, group: str | None = None, name: str | None = None) -> list[Guard]:
        """Snapshot of guards, optionally filtered by group name and guard name."""

        selected: list[Guard] = []
        for guard in self._guards:
            if group is not None and (guard.group_name or self.default_group) != group:
                continue
            if name is not None and guard.name != name:
                continue
            selected.append(guard)
        return selected

    def guard(self, name: str) -> Guard | None:
        matches = self.guards(name=name)
        return matches[0] if matches else None

    def contains(self, guard: Guard) -> bool:
        return any(existing is guard for existing in self._guards)

    def is_removed(self, guard: Guard) -> bool:
        return any(removed is guard for removed in self._removed)

    def remove(self, guard: Guard) -> None:
        """Permanently remove ``guard``; unknown guards are ignored."""

        self._guards = [existing for existing in self._guards if existing is not guard]
        if not self.is_removed(guard):
            self._removed.append(guard)

    @property
    def preserving_state(self) -> bool:
        return self._preserved_depth > 0

    @contextmanager
    def within_preserved_state(self) -> Iterator[None]:
        """Mark the registry busy for the duration of a task run."""

        self._preserved_depth += 1
        if self._preserved_depth == 1:
            logger.debug("Registry state preserved")
        try:
            yield
        finally:
            self._preserved_depth -= 1
            if self._preserved_depth == 0:
                logger.debug("Registry state restored")
