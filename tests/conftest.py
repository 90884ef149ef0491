"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest

from guard_runner.registry import Registry


class CountingRegistry(Registry):
    """Registry that records every removal request."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.removals: list[object] = []

    def remove(self, guard) -> None:
        self.removals.append(guard)
        super().remove(guard)


@pytest.fixture()
def registry() -> CountingRegistry:
    return CountingRegistry()


@pytest.fixture()
def task_logger(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    caplog.set_level(logging.DEBUG)
    return logging.getLogger("guard_runner.tests")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GUARD_RUNNER_LOG_LEVEL",
        "GUARD_RUNNER_DEFAULT_GROUP",
        "GUARD_RUNNER_HALT_ON_FAIL",
        "GUARD_RUNNER_GUARDFILE",
    ):
        monkeypatch.delenv(name, raising=False)
