"""Domain models for guard task orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from guard_runner.guard import Guard


class TaskKind(str, Enum):
    """Closed set of tasks a guard may implement; values are method names."""

    START = "start"
    STOP = "stop"
    RELOAD = "reload"
    RUN_ALL = "run_all"
    RUN_ON_CHANGES = "run_on_changes"
    RUN_ON_MODIFICATIONS = "run_on_modifications"
    RUN_ON_ADDITIONS = "run_on_additions"
    RUN_ON_REMOVALS = "run_on_removals"
    RUN_ON_DELETION = "run_on_deletion"


PRIMARY_TASKS: tuple[TaskKind, ...] = (
    TaskKind.START,
    TaskKind.STOP,
    TaskKind.RELOAD,
    TaskKind.RUN_ALL,
)


class ChangeCategory(str, Enum):
    """Kinds of filesystem change carried by a change set."""

    MODIFIED = "modified"
    ADDED = "added"
    REMOVED = "removed"


# Fine-grained task first, generic fallback last.
CHANGE_TASK_FALLBACKS: dict[ChangeCategory, tuple[TaskKind, ...]] = {
    ChangeCategory.MODIFIED: (TaskKind.RUN_ON_MODIFICATIONS, TaskKind.RUN_ON_CHANGES),
    ChangeCategory.ADDED: (TaskKind.RUN_ON_ADDITIONS, TaskKind.RUN_ON_CHANGES),
    ChangeCategory.REMOVED: (TaskKind.RUN_ON_REMOVALS, TaskKind.RUN_ON_DELETION),
}


class Boundary(str, Enum):
    """Where a ``TaskFailed`` raised by a guard is intercepted."""

    CONTAIN = "contain"
    ESCALATE = "escalate"


class OutcomeStatus(str, Enum):
    """Result of one supervised task invocation."""

    SUCCEEDED = "succeeded"
    HALTED = "halted"
    FAULTED = "faulted"


@dataclass(slots=True)
class GroupOptions:
    """Options shared by every guard of a group."""

    halt_on_fail: bool = False


@dataclass(slots=True)
class Group:
    """Named collection of guards sharing a halt-on-fail policy."""

    name: str
    options: GroupOptions = field(default_factory=GroupOptions)


@dataclass(slots=True)
class ScopeRequest:
    """Which guards a task run should reach.

    ``guard`` targets one guard, ``group`` one group (object or name);
    neither means every registered group.
    """

    guard: Guard | None = None
    group: Group | str | None = None

    def __post_init__(self) -> None:
        if self.guard is not None and self.group is not None:
            raise ValueError("Scope can target a guard or a group, not both.")

    @property
    def is_all(self) -> bool:
        return self.guard is None and self.group is None


@dataclass(slots=True)
class ChangeSet:
    """Modified, added and removed paths reported by the watcher."""

    modified: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()

    def paths_for(self, category: ChangeCategory) -> tuple[str, ...]:
        if category is ChangeCategory.MODIFIED:
            return self.modified
        if category is ChangeCategory.ADDED:
            return self.added
        return self.removed

    @property
    def is_empty(self) -> bool:
        return not (self.modified or self.added or self.removed)


@dataclass(slots=True)
class TaskOutcome:
    """Outcome of running one task on one guard."""

    guard: Guard
    task: TaskKind
    status: OutcomeStatus
    result: Any = None
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED

    def describe(self) -> str:
        """Render a one-line summary for CLI output."""

        line = f"{self.guard.name} <{self.task.value}>: {self.status.value}"
        if self.error is not None:
            line += f" ({type(self.error).__name__}: {self.error})"
        return line


class TaskLogger(Protocol):
    """Log sink used by the runner; ``logging.Logger`` satisfies it."""

    def error(self, msg: str, *args: object) -> None: ...

    def info(self, msg: str, *args: object) -> None: ...

    def debug(self, msg: str, *args: object) -> None: ...
