"""Tests for borderland.ui.models – level select view models."""

from __future__ import annotations

import pytest

from borderland.core.levels import Difficulty, TIERS
from borderland.core.progress import Progress
from borderland.ui.models import (
    LevelCard,
    TierSection,
    build_sections,
    continue_label,
    progress_summary,
)


# ===========================================================================
# LevelCard dataclass
# ===========================================================================

class TestLevelCard:
    def test_creation(self):
        card = LevelCard(level=3, difficulty=Difficulty.EASY, unlocked=True, completed=False)
        assert card.level == 3
        assert card.unlocked is True
        assert card.completed is False
        assert card.is_current is False  # default

    def test_equality(self):
        a = LevelCard(level=3, difficulty=Difficulty.EASY, unlocked=True, completed=True)
        b = LevelCard(level=3, difficulty=Difficulty.EASY, unlocked=True, completed=True)
        assert a == b


# ===========================================================================
# build_sections
# ===========================================================================

class TestBuildSections:
    @pytest.fixture()
    def sections(self):
        progress = Progress(unlocked_level=23, completed_levels=frozenset({1, 2, 5, 21}))
        return build_sections(progress)

    def test_four_sections(self, sections):
        assert [len(s.cards) for s in sections] == [20, 30, 30, 20]
        assert [s.title for s in sections] == [
            "♠ Spade Training",
            "♥ Heart Trials",
            "♦ Diamond Gauntlet",
            "♣ Club of Death",
        ]

    def test_unlock_flags(self, sections):
        cards = {card.level: card for s in sections for card in s.cards}
        assert cards[23].unlocked
        assert cards[23].is_current
        assert not cards[24].unlocked
        assert not cards[22].is_current

    def test_completion(self, sections):
        assert sections[0].cleared == 3
        assert sections[1].cleared == 1
        assert sections[2].cleared == 0

    def test_card_difficulty_matches_tier(self, sections):
        for section in sections:
            assert all(card.difficulty == section.tier.difficulty for card in section.cards)

    def test_section_dataclass(self):
        section = TierSection(tier=TIERS[0], suit="♠", cards=[])
        assert section.cleared == 0


# ===========================================================================
# Labels
# ===========================================================================

class TestLabels:
    def test_fresh_player(self):
        assert continue_label(Progress()) == "ENTER THE GAME"

    def test_returning_player(self):
        assert continue_label(Progress(unlocked_level=12)) == "CONTINUE (Lv.12)"

    def test_summary(self):
        progress = Progress(unlocked_level=4, completed_levels=frozenset({1, 2, 3}))
        assert progress_summary(progress) == "Progress: 3/100 cleared | Current: Level 4"
