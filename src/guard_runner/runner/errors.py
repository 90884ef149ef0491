"""Control-flow signals raised by guard code."""

from __future__ import annotations

from typing import Any


class TaskFailed(Exception):  # noqa: N818
    """Deliberate abort raised by a guard task or hook.

    Caught only at the guard boundary (when the guard's group tolerates
    failures) or at the group boundary (when the group halts on failure).
    """

    def __init__(self, message: str = "task has failed", *, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class TaskNotImplemented(NotImplementedError):  # noqa: N818
    """Raised when a guard does not implement the requested task."""

    def __init__(self, *, guard_name: str, task: str) -> None:
        super().__init__(f"{guard_name} does not implement <{task}>")
        self.guard_name = guard_name
        self.task = task
