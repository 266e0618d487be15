"""Exceptions raised by the game core."""

from __future__ import annotations


class BorderlandError(Exception):
    """Base class for all game errors."""


class InvalidLevel(BorderlandError, ValueError):
    """Level outside 1..100 or not yet unlocked."""

    def __init__(self, level: object, reason: str = "out of range") -> None:
        super().__init__(f"Invalid level {level!r}: {reason}")
        self.level = level


class InvalidDoor(BorderlandError, ValueError):
    """Door index outside 0..3."""

    def __init__(self, index: object) -> None:
        super().__init__(f"Invalid door index {index!r}: expected 0..3")
        self.index = index


class ProgressStoreError(BorderlandError, OSError):
    """Progress could not be persisted."""
