"""Path matching between change sets and guard watch patterns."""

from __future__ import annotations

from collections.abc import Iterable

from guard_runner.guard import Guard


class Watcher:
    """Filters changed paths down to those a guard watches."""

    def match_files(self, guard: Guard, paths: Iterable[str]) -> list[str]:
        matched: list[str] = []
        seen: set[str] = set()
        for raw in paths:
            path = _normalize_path(raw)
            if path in seen:
                continue
            if any(pattern.search(path) for pattern in guard.watchers):
                seen.add(path)
                matched.append(path)
        return matched


def _normalize_path(value: str) -> str:
    path = value.strip().replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path
