"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from borderland.core.levels import MAX_LEVEL, TIERS, Difficulty, Tier
from borderland.core.progress import Progress

SUITS = ("♠", "♥", "♦", "♣")


@dataclass
class LevelCard:
    """UI state for a single level button: unlock status and completion."""

    level: int
    difficulty: Difficulty
    unlocked: bool
    completed: bool
    is_current: bool = False


@dataclass
class TierSection:
    """One block of the level select screen."""

    tier: Tier
    suit: str
    cards: List[LevelCard]

    @property
    def title(self) -> str:
        return f"{self.suit} {self.tier.name}"

    @property
    def cleared(self) -> int:
        return sum(1 for card in self.cards if card.completed)


def build_sections(progress: Progress) -> List[TierSection]:
    sections = []
    for suit, tier in zip(SUITS, TIERS):
        cards = [
            LevelCard(
                level=level,
                difficulty=tier.difficulty,
                unlocked=progress.is_unlocked(level),
                completed=progress.is_completed(level),
                is_current=level == progress.unlocked_level,
            )
            for level in tier.levels
        ]
        sections.append(TierSection(tier=tier, suit=suit, cards=cards))
    return sections


def progress_summary(progress: Progress) -> str:
    return f"Progress: {progress.cleared_count}/{MAX_LEVEL} cleared | Current: Level {progress.unlocked_level}"


def continue_label(progress: Progress) -> str:
    if progress.unlocked_level == 1:
        return "ENTER THE GAME"
    return f"CONTINUE (Lv.{progress.unlocked_level})"
