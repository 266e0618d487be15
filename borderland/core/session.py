from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Tuple

from borderland.core.config import GameConfig
from borderland.core.errors import InvalidDoor, InvalidLevel
from borderland.core.levels import DOOR_COUNT, MAX_LEVEL, is_valid_level
from borderland.core.progress import Progress, ProgressStore
from borderland.core.puzzle import Puzzle, PuzzleGenerator
from borderland.core.scheduler import Scheduler, TaskHandle

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Time expires. The room seals forever. GAME OVER."


class Screen(str, Enum):
    MENU = "menu"
    LEVEL_SELECT = "level_select"
    PLAYING = "playing"
    RESULT = "result"


class Outcome(str, Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of everything the front end needs to draw."""

    screen: Screen
    progress: Progress
    active_level: Optional[int] = None
    active_puzzle: Optional[Puzzle] = None
    selected_door: Optional[int] = None
    time_left: int = 0
    revealed_hints: int = 0
    resolving: bool = False
    outcome: Outcome = Outcome.UNDETERMINED
    death_message: Optional[str] = None
    warning: Optional[str] = None

    @property
    def visible_hints(self) -> Tuple[str, ...]:
        if self.active_puzzle is None:
            return ()
        return self.active_puzzle.hints[: self.revealed_hints]

    @property
    def has_next_level(self) -> bool:
        return (
            self.screen == Screen.RESULT
            and self.outcome == Outcome.VICTORY
            and self.active_level is not None
            and self.active_level < MAX_LEVEL
        )


Listener = Callable[[SessionState], None]


class SessionController:
    """Owns the game state machine: menu, level select, playing, result.

    Each attempt at a level gets its own countdown and hint-reveal tasks and,
    once a door is picked, a one-shot resolution task. Every task is tagged
    with the attempt that created it and is ignored if that attempt has ended.
    """

    def __init__(
        self,
        store: ProgressStore,
        scheduler: Scheduler,
        generator: Optional[PuzzleGenerator] = None,
        config: Optional[GameConfig] = None,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._generator = generator or PuzzleGenerator()
        self._config = config or GameConfig()
        self._listeners: List[Listener] = []
        self._attempt = 0
        self._countdown: Optional[TaskHandle] = None
        self._hint_timer: Optional[TaskHandle] = None
        self._resolution: Optional[TaskHandle] = None
        progress, warning = self._load_progress()
        self._state = SessionState(screen=Screen.MENU, progress=progress, warning=warning)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def progress(self) -> Progress:
        return self._state.progress

    @property
    def config(self) -> GameConfig:
        return self._config

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def to_menu(self) -> SessionState:
        self._end_attempt()
        self._state = SessionState(
            screen=Screen.MENU, progress=self._state.progress, warning=self._state.warning
        )
        return self._publish()

    quit = to_menu

    def show_level_select(self) -> SessionState:
        self._end_attempt()
        self._state = SessionState(
            screen=Screen.LEVEL_SELECT, progress=self._state.progress, warning=self._state.warning
        )
        return self._publish()

    def start_level(self, level: int) -> SessionState:
        if not is_valid_level(level):
            raise InvalidLevel(level)
        progress = self._state.progress
        if not progress.is_unlocked(level):
            raise InvalidLevel(level, f"locked, unlocked up to {progress.unlocked_level}")

        self._end_attempt()
        puzzle = self._generator.generate(level)
        self._state = SessionState(
            screen=Screen.PLAYING,
            progress=progress,
            active_level=level,
            active_puzzle=puzzle,
            time_left=puzzle.time_limit,
            revealed_hints=puzzle.hints_revealed,
            warning=self._state.warning,
        )

        attempt = self._attempt
        self._countdown = self._scheduler.call_every(
            self._config.countdown_interval, partial(self._tick, attempt)
        )
        if puzzle.hints_revealed < len(puzzle.hints):
            self._hint_timer = self._scheduler.call_every(
                self._config.hint_interval, partial(self._reveal_hint, attempt)
            )
        logger.info(
            "Started level %d (%s, %ds, %d/%d hints)",
            level,
            puzzle.difficulty.value,
            puzzle.time_limit,
            puzzle.hints_revealed,
            len(puzzle.hints),
        )
        return self._publish()

    select_level = start_level

    def continue_game(self) -> SessionState:
        """Start the highest unlocked level."""
        return self.start_level(self._state.progress.unlocked_level)

    def retry(self) -> SessionState:
        """Replay the active level with a freshly generated puzzle."""
        level = self._state.active_level
        if level is None:
            logger.warning("Retry requested with no active level")
            return self._state
        return self.start_level(level)

    def next_level(self) -> SessionState:
        if not self._state.has_next_level:
            logger.warning("Next level requested without a victory to follow")
            return self._state
        return self.start_level(self._state.active_level + 1)

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------

    def choose_door(self, index: int) -> SessionState:
        """Commit to a door. Only the first choice of an attempt counts."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < DOOR_COUNT:
            raise InvalidDoor(index)
        state = self._state
        if state.screen != Screen.PLAYING or state.selected_door is not None or state.resolving:
            logger.debug("Ignoring door %d: no open choice", index)
            return state

        self._cancel_timers()
        self._state = replace(state, selected_door=index, resolving=True)
        self._resolution = self._scheduler.call_later(
            self._config.resolution_delay, partial(self._resolve, self._attempt, index)
        )
        logger.info("Level %d: door %d chosen", state.active_level, index + 1)
        return self._publish()

    def reset_progress(self) -> SessionState:
        """Wipe progress back to level 1. Refused while a level is being played."""
        if self._state.screen == Screen.PLAYING:
            logger.warning("Progress reset ignored during play")
            return self._state
        progress = Progress()
        self._state = replace(self._state, progress=progress, warning=self._persist(progress))
        logger.info("Progress reset")
        return self._publish()

    def shutdown(self) -> None:
        """Cancel everything still scheduled (e.g. on app exit)."""
        self._end_attempt()

    # ------------------------------------------------------------------
    # Scheduled callbacks
    # ------------------------------------------------------------------

    def _tick(self, attempt: int) -> None:
        state = self._state
        if attempt != self._attempt or state.screen != Screen.PLAYING or state.selected_door is not None:
            return
        time_left = max(state.time_left - 1, 0)
        if time_left > 0:
            self._state = replace(state, time_left=time_left)
            logger.debug("Level %d: %ds left", state.active_level, time_left)
        else:
            self._cancel_timers()
            self._state = replace(
                state,
                screen=Screen.RESULT,
                active_puzzle=None,
                time_left=0,
                outcome=Outcome.DEFEAT,
                death_message=TIMEOUT_MESSAGE,
            )
            logger.info("Level %d: time expired", state.active_level)
        self._publish()

    def _reveal_hint(self, attempt: int) -> None:
        state = self._state
        if attempt != self._attempt or state.screen != Screen.PLAYING or state.selected_door is not None:
            return
        total = len(state.active_puzzle.hints)
        revealed = min(state.revealed_hints + 1, total)
        if revealed >= total and self._hint_timer is not None:
            self._hint_timer.cancel()
            self._hint_timer = None
        if revealed != state.revealed_hints:
            self._state = replace(state, revealed_hints=revealed)
            self._publish()

    def _resolve(self, attempt: int, index: int) -> None:
        state = self._state
        if attempt != self._attempt or state.screen != Screen.PLAYING:
            return
        self._resolution = None
        puzzle = state.active_puzzle
        if puzzle.is_safe(index):
            progress = state.progress.with_completion(puzzle.level)
            self._state = replace(
                state,
                screen=Screen.RESULT,
                progress=progress,
                active_puzzle=None,
                resolving=False,
                outcome=Outcome.VICTORY,
                warning=self._persist(progress),
            )
            logger.info("Level %d cleared; unlocked up to %d", puzzle.level, progress.unlocked_level)
        else:
            self._state = replace(
                state,
                screen=Screen.RESULT,
                active_puzzle=None,
                resolving=False,
                outcome=Outcome.DEFEAT,
                death_message=puzzle.door_deaths[index],
            )
            logger.info("Level %d lost at door %d", puzzle.level, index + 1)
        self._publish()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_progress(self) -> Tuple[Progress, Optional[str]]:
        try:
            return self._store.load(), None
        except OSError as e:
            logger.warning("Could not load progress, starting fresh: %s", e)
            return Progress(), str(e)

    def _persist(self, progress: Progress) -> Optional[str]:
        """Save progress; a failure becomes a warning and play goes on."""
        try:
            self._store.save(progress)
        except OSError as e:
            logger.warning("Progress kept in memory only: %s", e)
            return str(e)
        return None

    def _cancel_timers(self) -> None:
        for task in (self._countdown, self._hint_timer):
            if task is not None:
                task.cancel()
        self._countdown = None
        self._hint_timer = None

    def _end_attempt(self) -> None:
        self._cancel_timers()
        if self._resolution is not None:
            self._resolution.cancel()
            self._resolution = None
        self._attempt += 1

    def _publish(self) -> SessionState:
        state = self._state
        for listener in list(self._listeners):
            listener(state)
        return state
