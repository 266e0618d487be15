from __future__ import annotations

import random
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from borderland.core.levels import DOOR_COUNT

SURVIVAL_MESSAGE = "Freedom. You escape the Borderland... for now."

DEATH_CATEGORIES: Tuple[str, ...] = (
    "crushed",
    "poisoned",
    "burned",
    "drowned",
    "electrocuted",
    "impaled",
)


def category_for(level: int, door: int) -> str:
    """Death category for a 1-based door number on a level."""
    return DEATH_CATEGORIES[(door + level) % len(DEATH_CATEGORIES)]


class DeathCatalog:
    """Death message variants loaded from ``data/deaths.yaml``."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or Path(__file__).resolve().parent.parent / "data" / "deaths.yaml"
        self._messages = self._load_messages()

    @property
    def path(self) -> Path:
        return self._path

    def messages(self, category: str) -> Tuple[str, ...]:
        return self._messages[category]

    def pick(self, category: str, rng: random.Random) -> str:
        return rng.choice(self._messages[category])

    def door_messages(self, level: int, safe_door: int, rng: random.Random) -> Tuple[str, ...]:
        """One message per door; the safe door gets the survival text."""
        deaths = []
        for door in range(1, DOOR_COUNT + 1):
            if door == safe_door:
                deaths.append(SURVIVAL_MESSAGE)
            else:
                deaths.append(self.pick(category_for(level, door), rng))
        return tuple(deaths)

    def _load_messages(self) -> Dict[str, Tuple[str, ...]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Death catalog not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML with 'categories'")
        categories = raw.get("categories")
        if not isinstance(categories, dict):
            raise ValueError(f"{self._path.name}: missing or invalid 'categories'")

        messages: Dict[str, Tuple[str, ...]] = {}
        for category in DEATH_CATEGORIES:
            variants = categories.get(category)
            if not isinstance(variants, list):
                raise ValueError(f"{self._path.name}: missing category '{category}'")
            cleaned = tuple(str(item).strip() for item in variants if str(item).strip())
            if not cleaned:
                raise ValueError(f"{self._path.name}: category '{category}' has no messages")
            if SURVIVAL_MESSAGE in cleaned:
                raise ValueError(f"{self._path.name}: category '{category}' repeats the survival text")
            messages[category] = cleaned
        return messages
