from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Optional

from borderland.core.errors import ProgressStoreError
from borderland.core.levels import MAX_LEVEL, MIN_LEVEL, is_valid_level

logger = logging.getLogger(__name__)

UNLOCKED_KEY = "borderland-unlocked"
COMPLETED_KEY = "borderland-completed"


@dataclass(frozen=True)
class Progress:
    unlocked_level: int = 1
    completed_levels: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def cleared_count(self) -> int:
        return len(self.completed_levels)

    def is_unlocked(self, level: int) -> bool:
        return MIN_LEVEL <= level <= self.unlocked_level

    def is_completed(self, level: int) -> bool:
        return level in self.completed_levels

    def with_completion(self, level: int) -> "Progress":
        """Record a win. Only the frontier level moves the unlock forward."""
        unlocked = self.unlocked_level
        if level == unlocked and level < MAX_LEVEL:
            unlocked = level + 1
        return Progress(
            unlocked_level=unlocked,
            completed_levels=self.completed_levels | {level},
        )


class ProgressStore(ABC):
    """Loads and saves Progress. Subclasses choose the medium."""

    @abstractmethod
    def load(self) -> Progress:
        ...

    @abstractmethod
    def save(self, progress: Progress) -> None:
        ...

    def reset(self) -> Progress:
        """Clear all progress. Only called when the player asks for it."""
        progress = Progress()
        self.save(progress)
        return progress


class MemoryProgressStore(ProgressStore):
    """Keeps progress in memory; nothing survives the process."""

    def __init__(self, progress: Optional[Progress] = None) -> None:
        self.progress = progress or Progress()
        self.saves = 0

    def load(self) -> Progress:
        return self.progress

    def save(self, progress: Progress) -> None:
        self.progress = progress
        self.saves += 1


class JsonProgressStore(ProgressStore):
    """Persists progress to disk across app restarts.
    File: ~/.borderland/progress.json, two keys: the unlocked level and the
    list of completed levels."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".borderland" / "progress.json"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> Progress:
        if not self._file_path.exists():
            return Progress()
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return Progress()
        if not isinstance(payload, dict):
            logger.warning("Ignoring progress file %s: expected a JSON object", self._file_path)
            return Progress()

        unlocked = _parse_unlocked(payload.get(UNLOCKED_KEY))
        completed = _parse_completed(payload.get(COMPLETED_KEY))
        # the frontier never trails a completed level
        if completed:
            unlocked = max(unlocked, min(max(completed) + 1, MAX_LEVEL))
        return Progress(unlocked_level=unlocked, completed_levels=completed)

    def save(self, progress: Progress) -> None:
        payload = {
            UNLOCKED_KEY: progress.unlocked_level,
            COMPLETED_KEY: sorted(progress.completed_levels),
        }
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            raise ProgressStoreError(f"Could not save progress to {self._file_path}: {e}") from e


def _parse_unlocked(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return 1
    return min(max(level, MIN_LEVEL), MAX_LEVEL)


def _parse_completed(value: Any) -> FrozenSet[int]:
    if not isinstance(value, list):
        return frozenset()
    return frozenset(_valid_levels(value))


def _valid_levels(values: Iterable[Any]) -> Iterable[int]:
    for item in values:
        if is_valid_level(item):
            yield item
