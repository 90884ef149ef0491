"""Runtime configuration for the guard runner CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(slots=True)
class Settings:
    """Settings loaded from ``GUARD_RUNNER_*`` environment variables."""

    log_level: str = "INFO"
    default_group: str = "default"
    halt_on_fail: bool = False
    guardfile: str | None = None

    @classmethod
    def from_env(cls, guardfile: str | None = None) -> Settings:
        """Load settings from environment with defaults for local use."""

        settings = cls(
            log_level=os.getenv("GUARD_RUNNER_LOG_LEVEL", "INFO").strip().upper(),
            default_group=os.getenv("GUARD_RUNNER_DEFAULT_GROUP", "default").strip(),
            halt_on_fail=_env_bool("GUARD_RUNNER_HALT_ON_FAIL", default=False),
            guardfile=guardfile or (os.getenv("GUARD_RUNNER_GUARDFILE", "").strip() or None),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid GUARD_RUNNER_LOG_LEVEL: {self.log_level!r}. "
                f"Use one of {', '.join(_LOG_LEVELS)}.",
            )
        if not self.default_group:
            raise ValueError("GUARD_RUNNER_DEFAULT_GROUP must not be empty.")
        if self.guardfile is not None and ":" not in self.guardfile:
            raise ValueError(
                f"Invalid guardfile {self.guardfile!r}. Expected format '<module>:<callable>'.",
            )

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
