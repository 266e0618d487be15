from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from borderland.core.deaths import DeathCatalog
from borderland.core.errors import InvalidLevel
from borderland.core.hints import deadly_doors, generate_hints
from borderland.core.levels import (
    Difficulty,
    difficulty_for,
    hints_revealed_for,
    is_valid_level,
    safe_door_for,
    time_limit_for,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Puzzle:
    """One generated room: four doors, one safe, with hints and a countdown."""

    level: int
    difficulty: Difficulty
    safe_door: int
    hints: Tuple[str, ...]
    door_deaths: Tuple[str, ...]
    time_limit: int
    hints_revealed: int

    @property
    def safe_index(self) -> int:
        """0-based index of the safe door."""
        return self.safe_door - 1

    @property
    def deadly_doors(self) -> Tuple[int, ...]:
        return tuple(deadly_doors(self.safe_door))

    def is_safe(self, index: int) -> bool:
        return index == self.safe_index


class PuzzleGenerator:
    """Builds puzzles for levels 1..100.

    Everything except death wording and the deadly-door shuffle behind the
    hints is a function of the level. Pass a seeded ``random.Random`` to pin
    those too.
    """

    def __init__(self, rng: Optional[random.Random] = None, deaths: Optional[DeathCatalog] = None) -> None:
        self._rng = rng or random.Random()
        self._deaths = deaths or DeathCatalog()

    @property
    def deaths(self) -> DeathCatalog:
        return self._deaths

    def generate(self, level: int) -> Puzzle:
        if not is_valid_level(level):
            raise InvalidLevel(level)

        difficulty = difficulty_for(level)
        safe_door = safe_door_for(level)
        puzzle = Puzzle(
            level=level,
            difficulty=difficulty,
            safe_door=safe_door,
            hints=generate_hints(level, safe_door, difficulty, self._rng),
            door_deaths=self._deaths.door_messages(level, safe_door, self._rng),
            time_limit=time_limit_for(level),
            hints_revealed=hints_revealed_for(difficulty),
        )
        logger.debug("Generated puzzle for level %d (%s)", level, difficulty.value)
        return puzzle


_default_generator: Optional[PuzzleGenerator] = None


def generate_puzzle(level: int) -> Puzzle:
    """Generate a puzzle with a shared, unseeded generator."""
    global _default_generator
    if _default_generator is None:
        _default_generator = PuzzleGenerator()
    return _default_generator.generate(level)
