"""Hint templates and hint selection.

Every template takes ``(safe, deadly)`` where ``safe`` is the 1-based safe door
and ``deadly`` is the list of the three other door numbers (in shuffled order),
and returns one line of hint text. Whatever a template claims holds for that
safe door and any order of the deadly doors.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from borderland.core.levels import DOOR_COUNT, Difficulty, hint_count_for

HintTemplate = Callable[[int, Sequence[int]], str]

_GREEK = ("", "Alpha", "Beta", "Gamma", "Omega")
_CARDS = ("", "Ace", "Deuce", "Trey", "Cater")
# primes up to n: 2 -> 1, 3 -> 2, 5 -> 3, 7 -> 4
_PRIME_BOUNDS = ("", "2", "3", "5", "7")
# running sums of 1, 1, 2, 3
_FIBONACCI_TOTALS = ("", "1", "2", "4", "7")


def _walled_pair(safe: int, deadly: Sequence[int]) -> Tuple[int, int]:
    """First pair of deadly doors with no safe door strictly between them."""
    for i, first in enumerate(deadly):
        for second in deadly[i + 1:]:
            if not min(first, second) < safe < max(first, second):
                return first, second
    return deadly[0], deadly[1]


def _doom_in_a_row(safe: int) -> str:
    if safe == 1:
        return "Three consecutive fates share doom. One stands before."
    if safe == DOOR_COUNT:
        return "Three consecutive fates share doom. One stands after."
    return "No three doors in a row share doom."


EASY_HINTS: Tuple[HintTemplate, ...] = (
    lambda safe, deadly: "Odd numbers hold truth." if safe % 2 == 1 else "Even paths lead to light.",
    lambda safe, deadly: "Salvation lies before the middle." if safe <= 2 else "Look beyond the center.",
    lambda safe, deadly: f"{deadly[0]} breathes fire. {deadly[1]} drowns hope.",
    lambda safe, deadly: "The edge knows peace." if safe in (1, 4) else "Peace hides between extremes.",
    lambda safe, deadly: f"If {deadly[0]} is death, what is {deadly[0] - 1 if deadly[0] == 4 else deadly[0] + 1}?",
    lambda safe, deadly: f"Count to {safe}. Stop. That's your answer.",
)

MEDIUM_HINTS: Tuple[HintTemplate, ...] = (
    lambda safe, deadly: f"The sum of death is {sum(deadly)}.",
    lambda safe, deadly: f"{deadly[0]} mirrors {deadly[2]} in fate.",
    lambda safe, deadly: (
        "Edges deceive. The center survives." if safe in (2, 3) else "The center burns. Seek the margins."
    ),
    lambda safe, deadly: "Between {} and {}, only walls remain.".format(*_walled_pair(safe, deadly)),
    lambda safe, deadly: f"Multiply one by {safe}. The product is your path.",
    lambda safe, deadly: f"{safe - 1} doors of death stand before salvation.",
    lambda safe, deadly: f"The {'lesser' if deadly[0] < safe else 'greater'} numbers bring ruin.",
    lambda safe, deadly: f"What remains when you subtract {4 - safe} from the final door?",
)

HARD_HINTS: Tuple[HintTemplate, ...] = (
    lambda safe, deadly: f"{_GREEK[safe]} is not death.",
    lambda safe, deadly: f"The product of doom: {deadly[0]} × {deadly[1]} = {deadly[0] * deadly[1]}.",
    lambda safe, deadly: f"In binary, life reads {safe:03b}.",
    lambda safe, deadly: f"Sum any two deadly doors. The largest total is {sum(sorted(deadly)[1:])}.",
    lambda safe, deadly: f"Count the primes up to {_PRIME_BOUNDS[safe]}. Walk that many doors.",
    lambda safe, deadly: (
        f"{deadly[0]} + {deadly[1]} + {deadly[2]} = {sum(deadly)}. Life is what remains."
    ),
    lambda safe, deadly: f"Divide 8 by {8 / safe:g}. Walk through that door.",
    lambda safe, deadly: _doom_in_a_row(safe),
    lambda safe, deadly: f"The answer squared minus {safe * safe - safe} equals itself.",
)

DEADLY_HINTS: Tuple[HintTemplate, ...] = (
    lambda safe, deadly: f"{_CARDS[safe]} of spades grants passage.",
    lambda safe, deadly: (
        f"XOR of death: {deadly[0]} ⊕ {deadly[1]} ⊕ {deadly[2]} = {deadly[0] ^ deadly[1] ^ deadly[2]}."
    ),
    lambda safe, deadly: (
        f"Add Fibonacci terms from the start until you reach {_FIBONACCI_TOTALS[safe]}. Count them."
    ),
    lambda safe, deadly: f"Modulo 5, death sums to {sum(deadly) % 5}.",
    lambda safe, deadly: f"In hexadecimal, freedom is 0x{safe:X}.",
    lambda safe, deadly: f"The median of death is {sorted(deadly)[1]}.",
    lambda safe, deadly: f"{safe} is prime: {'TRUE' if safe in (2, 3) else 'FALSE'}. Act accordingly.",
    lambda safe, deadly: (
        f"Geometric mean of doom approaches {round(math.prod(deadly) ** (1 / 3), 1)}."
    ),
    # roots are safe and 5, so safe is the only door that solves it
    lambda safe, deadly: f"The only door where n² - {safe + 5}n + {safe * 5} = 0.",
    lambda safe, deadly: f"When sorted, death occupies positions that exclude index {safe - 1}.",
)

HINT_POOLS: Dict[Difficulty, Tuple[HintTemplate, ...]] = {
    Difficulty.EASY: EASY_HINTS,
    Difficulty.MEDIUM: MEDIUM_HINTS,
    Difficulty.HARD: HARD_HINTS,
    Difficulty.DEADLY: DEADLY_HINTS,
}


def deadly_doors(safe_door: int) -> List[int]:
    return [door for door in range(1, DOOR_COUNT + 1) if door != safe_door]


def direct_hint(door: int) -> str:
    return f"Door {door} is NOT safe."


def _fallback_hint(hints: Sequence[str], deadly: Sequence[int]) -> str:
    """Name a deadly door outright, rotating past doors already named."""
    for offset in range(len(deadly)):
        text = direct_hint(deadly[(len(hints) + offset) % len(deadly)])
        if text not in hints:
            return text
    return direct_hint(deadly[len(hints) % len(deadly)])


def generate_hints(
    level: int,
    safe_door: int,
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    pools: Optional[Mapping[Difficulty, Sequence[HintTemplate]]] = None,
) -> Tuple[str, ...]:
    """Build the ordered hint list for a puzzle.

    Hard and deadly puzzles open with one medium-tier hint as a soft clue.
    The rest index the tier pool with ``(level + len(hints) * 7)``; an index
    that was already used is replaced by a direct "Door N is NOT safe." line.
    """
    rng = rng or random.Random()
    pools = pools or HINT_POOLS

    deadly = deadly_doors(safe_door)
    rng.shuffle(deadly)

    templates = pools[difficulty]
    target = hint_count_for(difficulty)
    hints: List[str] = []
    used = set()

    if difficulty in (Difficulty.HARD, Difficulty.DEADLY):
        softer = pools[Difficulty.MEDIUM]
        hints.append(softer[(level + safe_door) % len(softer)](safe_door, deadly))

    while len(hints) < target:
        idx = (level + len(hints) * 7) % len(templates)
        if idx not in used:
            used.add(idx)
            hints.append(templates[idx](safe_door, deadly))
        else:
            hints.append(_fallback_hint(hints, deadly))

    return tuple(hints)
