from __future__ import annotations

import logging

import allure
import pytest

from guard_runner.guard import Guard
from guard_runner.runner.errors import TaskFailed, TaskNotImplemented
from guard_runner.runner.models import OutcomeStatus, TaskKind
from guard_runner.runner.policy import GroupBoundaries
from guard_runner.runner.supervisor import SupervisedExecutor

pytestmark = [
    allure.epic("Guard Runner"),
    allure.feature("Supervised Execution"),
]


class Echo(Guard):
    def run_all(self):
        return "done"

    def run_on_changes(self, paths):
        return [path.upper() for path in paths]


class Exploding(Guard):
    def start(self):
        raise RuntimeError("boom")


class Failing(Guard):
    def start(self):
        raise TaskFailed("lint errors", value=3)


class Declining(Guard):
    def reload(self):
        raise NotImplementedError


def _executor(registry, task_logger) -> SupervisedExecutor:
    return SupervisedExecutor(
        registry=registry,
        logger=task_logger,
        group_boundaries=GroupBoundaries(),
    )


def _records(caplog: pytest.LogCaptureFixture, level: int) -> list[logging.LogRecord]:
    return [record for record in caplog.records if record.levelno == level]


def test_success_brackets_task_with_hooks(registry, task_logger) -> None:
    guard = registry.add_guard(Echo())
    events: list[tuple[str, tuple]] = []
    guard.add_callback("run_on_changes_begin", lambda g, e, *a: events.append((e, a)))
    guard.add_callback("run_on_changes_end", lambda g, e, *a: events.append((e, a)))

    outcome = _executor(registry, task_logger).run_supervised(
        guard, TaskKind.RUN_ON_CHANGES, ["a.py"]
    )

    assert outcome.status is OutcomeStatus.SUCCEEDED
    assert outcome.result == ["A.PY"]
    assert events == [
        ("run_on_changes_begin", (["a.py"],)),
        ("run_on_changes_end", (["A.PY"],)),
    ]


def test_generic_fault_fires_guard_once_and_returns_fault(
    registry, task_logger, caplog: pytest.LogCaptureFixture
) -> None:
    guard = registry.add_guard(Exploding())
    sibling = registry.add_guard(Echo())

    outcome = _executor(registry, task_logger).run_supervised(guard, TaskKind.START)

    assert outcome.status is OutcomeStatus.FAULTED
    assert isinstance(outcome.error, RuntimeError)
    assert registry.removals == [guard]
    assert registry.guards() == [sibling]
    errors = _records(caplog, logging.ERROR)
    infos = _records(caplog, logging.INFO)
    assert len(errors) == 1
    assert len(infos) == 1
    assert "Exploding failed to achieve its <start>" in errors[0].getMessage()
    assert "RuntimeError: boom" in errors[0].getMessage()
    assert infos[0].getMessage() == "Exploding has just been fired"


def test_fault_in_hook_is_a_generic_fault(registry, task_logger) -> None:
    guard = registry.add_guard(Echo())

    def _broken_hook(g, event, *args):
        raise KeyError("hook")

    guard.add_callback("run_all_begin", _broken_hook)

    outcome = _executor(registry, task_logger).run_supervised(guard, TaskKind.RUN_ALL)

    assert outcome.status is OutcomeStatus.FAULTED
    assert registry.removals == [guard]


def test_unsupported_task_raises_without_side_effects(
    registry, task_logger, caplog: pytest.LogCaptureFixture
) -> None:
    guard = registry.add_guard(Echo())
    begun: list[str] = []
    guard.add_callback("stop_begin", lambda g, e, *a: begun.append(e))

    with pytest.raises(TaskNotImplemented):
        _executor(registry, task_logger).run_supervised(guard, TaskKind.STOP)

    assert begun == []
    assert registry.removals == []
    assert _records(caplog, logging.ERROR) == []


def test_not_implemented_at_call_time_propagates(registry, task_logger) -> None:
    guard = registry.add_guard(Declining())

    with pytest.raises(NotImplementedError):
        _executor(registry, task_logger).run_supervised(guard, TaskKind.RELOAD)

    assert registry.contains(guard)


def test_failure_signal_is_contained_for_tolerant_group(
    registry, task_logger, caplog: pytest.LogCaptureFixture
) -> None:
    guard = registry.add_guard(Failing())

    outcome = _executor(registry, task_logger).run_supervised(guard, TaskKind.START)

    assert outcome.status is OutcomeStatus.HALTED
    assert outcome.result == 3
    assert registry.contains(guard)
    assert _records(caplog, logging.ERROR) == []
    assert _records(caplog, logging.INFO) == []


def test_failure_signal_escalates_inside_group_boundary(registry, task_logger) -> None:
    registry.add_group("strict", halt_on_fail=True)
    guard = registry.add_guard(Failing(group="strict"))
    boundaries = GroupBoundaries()
    executor = SupervisedExecutor(
        registry=registry,
        logger=task_logger,
        group_boundaries=boundaries,
    )

    with boundaries.installed(), pytest.raises(TaskFailed):
        executor.run_supervised(guard, TaskKind.START)

    assert registry.contains(guard)


def test_failure_signal_is_contained_without_group_boundary(registry, task_logger) -> None:
    registry.add_group("strict", halt_on_fail=True)
    guard = registry.add_guard(Failing(group="strict"))

    outcome = _executor(registry, task_logger).run_supervised(guard, TaskKind.START)

    assert outcome.status is OutcomeStatus.HALTED


def _raise_task_failed(guard, event, *args):
    raise TaskFailed("hook vetoed")


def _raise_not_implemented(guard, event, *args):
    raise NotImplementedError


def test_failure_signal_from_hook_is_contained_for_tolerant_group(
    registry, task_logger
) -> None:
    registry.add_group("tolerant")
    guard = registry.add_guard(Echo(group="tolerant"))
    guard.add_callback("run_all_begin", _raise_task_failed)

    outcome = _executor(registry, task_logger).run_supervised(guard, TaskKind.RUN_ALL)

    assert outcome.status is OutcomeStatus.HALTED
    assert registry.contains(guard)
    assert registry.removals == []


def test_failure_signal_from_end_hook_escalates_inside_group_boundary(
    registry, task_logger
) -> None:
    registry.add_group("strict", halt_on_fail=True)
    guard = registry.add_guard(Echo(group="strict"))
    guard.add_callback("run_all_end", _raise_task_failed)
    boundaries = GroupBoundaries()
    executor = SupervisedExecutor(
        registry=registry,
        logger=task_logger,
        group_boundaries=boundaries,
    )

    with boundaries.installed(), pytest.raises(TaskFailed, match="hook vetoed"):
        executor.run_supervised(guard, TaskKind.RUN_ALL)

    assert registry.contains(guard)


def test_not_implemented_from_begin_hook_propagates(
    registry, task_logger, caplog: pytest.LogCaptureFixture
) -> None:
    guard = registry.add_guard(Echo())
    guard.add_callback("run_on_changes_begin", _raise_not_implemented)

    with pytest.raises(NotImplementedError):
        _executor(registry, task_logger).run_supervised(guard, TaskKind.RUN_ON_CHANGES, ["a"])

    assert registry.contains(guard)
    assert _records(caplog, logging.ERROR) == []
