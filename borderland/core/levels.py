from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

MIN_LEVEL = 1
MAX_LEVEL = 100
DOOR_COUNT = 4

BASE_TIME_LIMIT = 60
MIN_TIME_LIMIT = 15


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DEADLY = "deadly"


@dataclass(frozen=True)
class Tier:
    """A band of levels sharing one difficulty."""

    difficulty: Difficulty
    name: str
    first: int
    last: int
    hint_count: int
    hints_revealed: int

    def __contains__(self, level: object) -> bool:
        return isinstance(level, int) and self.first <= level <= self.last

    @property
    def levels(self) -> range:
        return range(self.first, self.last + 1)


TIERS: List[Tier] = [
    Tier(Difficulty.EASY, "Spade Training", 1, 20, hint_count=2, hints_revealed=2),
    Tier(Difficulty.MEDIUM, "Heart Trials", 21, 50, hint_count=3, hints_revealed=1),
    Tier(Difficulty.HARD, "Diamond Gauntlet", 51, 80, hint_count=3, hints_revealed=1),
    Tier(Difficulty.DEADLY, "Club of Death", 81, 100, hint_count=4, hints_revealed=1),
]


def is_valid_level(level: object) -> bool:
    return isinstance(level, int) and not isinstance(level, bool) and MIN_LEVEL <= level <= MAX_LEVEL


def tier_for(level: int) -> Tier:
    """Tier for a level; anything past the last boundary counts as deadly."""
    for tier in TIERS:
        if level <= tier.last:
            return tier
    return TIERS[-1]


def difficulty_for(level: int) -> Difficulty:
    return tier_for(level).difficulty


def tier_of(difficulty: Difficulty) -> Tier:
    for tier in TIERS:
        if tier.difficulty == difficulty:
            return tier
    raise KeyError(difficulty)


def safe_door_for(level: int) -> int:
    """1-based safe door. Stable per level, non-sequential across levels."""
    return ((level * 7 + 3) % DOOR_COUNT) + 1


def time_limit_for(level: int) -> int:
    """Countdown in seconds: 2 s shorter every 5 levels, never below 15."""
    return max(MIN_TIME_LIMIT, BASE_TIME_LIMIT - 2 * (level // 5))


def hint_count_for(difficulty: Difficulty) -> int:
    return tier_of(difficulty).hint_count


def hints_revealed_for(difficulty: Difficulty) -> int:
    return tier_of(difficulty).hints_revealed
