"""Escalation policy for deliberate task failures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from guard_runner.runner.models import Boundary

if TYPE_CHECKING:
    from guard_runner.guard import Guard
    from guard_runner.registry import Registry

logger = logging.getLogger(__name__)


def boundary_for(guard: Guard, registry: Registry) -> Boundary:
    """Decide whether ``TaskFailed`` from ``guard`` stops at the guard.

    Only a group referenced by name is looked up; an unset group or a group
    object attached directly always contains. The lookup happens on every
    call so option changes apply immediately.
    """

    if not isinstance(guard.group, str):
        return Boundary.CONTAIN

    group = registry.group(guard.group)
    if group is None:
        logger.debug("Group %r of %s is not registered", guard.group, type(guard).__name__)
        return Boundary.CONTAIN
    return Boundary.ESCALATE if group.options.halt_on_fail else Boundary.CONTAIN


class GroupBoundaries:
    """Tracks whether a group-level boundary is active for the current call."""

    def __init__(self) -> None:
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    @contextmanager
    def installed(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
