"""Base class for guards and their hook callbacks."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import Any

from guard_runner.runner.models import Group, TaskKind

logger = logging.getLogger(__name__)

HookCallback = Callable[..., Any]


class Guard:
    """Plugin-like unit that reacts to runner tasks.

    Subclasses implement any subset of the ``TaskKind`` methods. A task counts
    as supported when the subclass overrides it; the base implementations
    raise ``NotImplementedError`` so dynamic implementations may still decline
    at call time.
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        group: Group | str | None = None,
        watchers: Iterable[str | re.Pattern[str]] = (),
        options: dict[str, Any] | None = None,
    ) -> None:
        self.name = name or type(self).__name__.lower()
        self.group = group
        self.watchers: tuple[re.Pattern[str], ...] = tuple(
            re.compile(pattern) if isinstance(pattern, str) else pattern for pattern in watchers
        )
        self.options: dict[str, Any] = dict(options or {})
        self._callbacks: dict[str, list[HookCallback]] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} group={self.group_name!r}>"

    @property
    def group_name(self) -> str | None:
        if isinstance(self.group, Group):
            return self.group.name
        return self.group

    @classmethod
    def supported_tasks(cls) -> frozenset[TaskKind]:
        """Tasks this guard class implements."""

        return frozenset(
            task
            for task in TaskKind
            if getattr(cls, task.value, None) is not getattr(Guard, task.value)
        )

    def add_callback(self, event: str, callback: HookCallback) -> None:
        """Register ``callback(guard, event, *args)`` for a hook event."""

        self._callbacks.setdefault(event, []).append(callback)

    def hook(self, event: str, *args: Any) -> None:
        """Run callbacks registered for ``event`` in registration order."""

        for callback in list(self._callbacks.get(event, ())):
            logger.debug("Hook :%s executed for %s", event, type(self).__name__)
            callback(self, event, *args)

    def start(self) -> Any:
        raise NotImplementedError

    def stop(self) -> Any:
        raise NotImplementedError

    def reload(self) -> Any:
        raise NotImplementedError

    def run_all(self) -> Any:
        raise NotImplementedError

    def run_on_changes(self, paths: list[str]) -> Any:
        raise NotImplementedError

    def run_on_modifications(self, paths: list[str]) -> Any:
        raise NotImplementedError

    def run_on_additions(self, paths: list[str]) -> Any:
        raise NotImplementedError

    def run_on_removals(self, paths: list[str]) -> Any:
        raise NotImplementedError

    def run_on_deletion(self, paths: list[str]) -> Any:
        raise NotImplementedError
