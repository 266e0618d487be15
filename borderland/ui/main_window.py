from __future__ import annotations

from typing import Dict, List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from borderland.core.levels import DOOR_COUNT, MAX_LEVEL
from borderland.core.session import Outcome, Screen, SessionController, SessionState
from borderland.ui.models import SUITS, build_sections, continue_label, progress_summary

_MAX_HINTS = 4
_GRID_COLUMNS = 10

RULES = (
    "♠  Four doors. Only ONE leads to survival.",
    "♥  Hints reveal over time. Read them LITERALLY.",
    f"♦  {MAX_LEVEL} levels. Each harder than the last.",
    "♣  Choose wrong, and GAME OVER.",
)


def _label(text: str = "", size: int = 12, bold: bool = False, wrap: bool = False) -> QLabel:
    label = QLabel(text)
    font = QFont()
    font.setPointSize(size)
    font.setBold(bold)
    label.setFont(font)
    label.setWordWrap(wrap)
    return label


class MainWindow(QMainWindow):
    """Main application window: menu, level select, game room and result screens.

    The window holds no game rules of its own. It draws whatever state the
    session controller publishes and forwards button clicks back to it.
    """

    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self._controller = controller

        self._stack: Optional[QStackedWidget] = None
        self._pages: Dict[Screen, QWidget] = {}

        self._continue_button: Optional[QPushButton] = None
        self._menu_progress_label: Optional[QLabel] = None

        self._levels_summary_label: Optional[QLabel] = None
        self._level_buttons: Dict[int, QPushButton] = {}
        self._section_boxes: List[QGroupBox] = []

        self._room_level_label: Optional[QLabel] = None
        self._room_difficulty_label: Optional[QLabel] = None
        self._timer_label: Optional[QLabel] = None
        self._hint_labels: List[QLabel] = []
        self._door_buttons: List[QPushButton] = []

        self._result_title_label: Optional[QLabel] = None
        self._result_message_label: Optional[QLabel] = None
        self._next_button: Optional[QPushButton] = None

        self.setWindowTitle("Alice in Borderland: Deadly Logic Room")
        self._build_ui()
        self._unsubscribe = controller.subscribe(self._render)
        self._render(controller.state)

    def _build_ui(self) -> None:
        self._stack = QStackedWidget()
        self._pages = {
            Screen.MENU: self._build_menu(),
            Screen.LEVEL_SELECT: self._build_level_select(),
            Screen.PLAYING: self._build_room(),
            Screen.RESULT: self._build_result(),
        }
        for page in self._pages.values():
            self._stack.addWidget(page)
        self.setCentralWidget(self._stack)

    def _build_menu(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        title = _label("ALICE IN BORDERLAND", size=32, bold=True)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle = _label("DEADLY • LOGIC • ROOM", size=18, bold=True)
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)
        layout.addWidget(subtitle)

        rules = QGroupBox("GAME RULES")
        rules_layout = QVBoxLayout(rules)
        for rule in RULES:
            rules_layout.addWidget(_label(rule, size=13))
        layout.addWidget(rules)

        self._continue_button = QPushButton()
        self._continue_button.clicked.connect(self._controller.continue_game)
        select_button = QPushButton("SELECT LEVEL")
        select_button.clicked.connect(self._controller.show_level_select)
        reset_button = QPushButton("Reset progress")
        reset_button.clicked.connect(self._reset_progress)
        for button in (self._continue_button, select_button, reset_button):
            layout.addWidget(button)

        self._menu_progress_label = _label(size=12)
        self._menu_progress_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._menu_progress_label)
        return page

    def _build_level_select(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        back_button = QPushButton("← Back to Menu")
        back_button.clicked.connect(self._controller.to_menu)
        layout.addWidget(back_button, alignment=Qt.AlignmentFlag.AlignLeft)
        layout.addWidget(_label("SELECT GAME", size=24, bold=True))
        self._levels_summary_label = _label(size=12)
        layout.addWidget(self._levels_summary_label)

        container = QWidget()
        sections_layout = QVBoxLayout(container)
        for section in build_sections(self._controller.progress):
            box = QGroupBox(section.title)
            grid = QGridLayout(box)
            for i, card in enumerate(section.cards):
                button = QPushButton(str(card.level))
                button.clicked.connect(lambda _=False, level=card.level: self._controller.select_level(level))
                grid.addWidget(button, i // _GRID_COLUMNS, i % _GRID_COLUMNS)
                self._level_buttons[card.level] = button
            self._section_boxes.append(box)
            sections_layout.addWidget(box)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(container)
        layout.addWidget(scroll)
        return page

    def _build_room(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        header = QHBoxLayout()
        self._room_level_label = _label(size=16, bold=True)
        self._room_difficulty_label = _label(size=12)
        quit_button = QPushButton("✕ Quit Game")
        quit_button.clicked.connect(self._controller.quit)
        header.addWidget(self._room_level_label)
        header.addWidget(self._room_difficulty_label)
        header.addStretch(1)
        header.addWidget(quit_button)
        layout.addLayout(header)

        self._timer_label = _label(size=36, bold=True)
        self._timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._timer_label)

        hints_box = QGroupBox("Intelligence Report")
        hints_layout = QVBoxLayout(hints_box)
        for _ in range(_MAX_HINTS):
            label = _label(size=13, wrap=True)
            hints_layout.addWidget(label)
            self._hint_labels.append(label)
        layout.addWidget(hints_box)

        doors = QHBoxLayout()
        for idx in range(DOOR_COUNT):
            button = QPushButton(f"{SUITS[idx]}\nDOOR {idx + 1}")
            button.setMinimumHeight(160)
            button.clicked.connect(lambda _=False, index=idx: self._controller.choose_door(index))
            doors.addWidget(button)
            self._door_buttons.append(button)
        layout.addLayout(doors)
        return page

    def _build_result(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._result_title_label = _label(size=28, bold=True)
        self._result_title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._result_message_label = _label(size=14, wrap=True)
        self._result_message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._result_title_label)
        layout.addWidget(self._result_message_label)

        retry_button = QPushButton("Retry")
        retry_button.clicked.connect(self._controller.retry)
        self._next_button = QPushButton("Next Level")
        self._next_button.clicked.connect(self._controller.next_level)
        menu_button = QPushButton("Menu")
        menu_button.clicked.connect(self._controller.to_menu)
        for button in (retry_button, self._next_button, menu_button):
            layout.addWidget(button)
        return page

    def _render(self, state: SessionState) -> None:
        if state.screen == Screen.MENU:
            self._render_menu(state)
        elif state.screen == Screen.LEVEL_SELECT:
            self._render_level_select(state)
        elif state.screen == Screen.PLAYING:
            self._render_room(state)
        else:
            self._render_result(state)
        self._stack.setCurrentWidget(self._pages[state.screen])
        if state.warning:
            self.statusBar().showMessage(f"Progress not saved: {state.warning}")
        else:
            self.statusBar().clearMessage()

    def _render_menu(self, state: SessionState) -> None:
        self._continue_button.setText(continue_label(state.progress))
        self._menu_progress_label.setText(
            f"Progress: {state.progress.cleared_count}/{MAX_LEVEL} levels cleared"
        )

    def _render_level_select(self, state: SessionState) -> None:
        self._levels_summary_label.setText(progress_summary(state.progress))
        for box, section in zip(self._section_boxes, build_sections(state.progress)):
            box.setTitle(f"{section.title}  ({section.cleared}/{len(section.cards)})")
            for card in section.cards:
                button = self._level_buttons[card.level]
                button.setEnabled(card.unlocked)
                if card.completed:
                    button.setText(f"{card.level} ✓")
                elif card.unlocked:
                    button.setText(str(card.level))
                else:
                    button.setText(f"{card.level} 🔒")

    def _render_room(self, state: SessionState) -> None:
        puzzle = state.active_puzzle
        self._room_level_label.setText(f"LEVEL {puzzle.level}")
        self._room_difficulty_label.setText(puzzle.difficulty.value.upper())
        self._timer_label.setText(f"{state.time_left} SEC")

        for i, label in enumerate(self._hint_labels):
            label.setVisible(i < len(puzzle.hints))
            if i < state.revealed_hints:
                label.setText(f"{i + 1}. {puzzle.hints[i]}")
            else:
                label.setText("Decrypting intelligence...")

        for i, button in enumerate(self._door_buttons):
            button.setEnabled(state.selected_door is None)
            marker = "  ◀" if state.selected_door == i else ""
            button.setText(f"{SUITS[i]}\nDOOR {i + 1}{marker}")

    def _render_result(self, state: SessionState) -> None:
        if state.outcome == Outcome.VICTORY:
            self._result_title_label.setText("YOU SURVIVED")
            self._result_message_label.setText(f"Level {state.active_level} cleared.")
        else:
            self._result_title_label.setText("GAME OVER")
            self._result_message_label.setText(state.death_message or "")
        self._next_button.setVisible(state.has_next_level)

    def _reset_progress(self) -> None:
        """Ask for confirmation and, if confirmed, wipe all progress."""
        answer = QMessageBox.question(
            self,
            "Reset progress",
            "Erase every cleared level and start again from level 1?",
        )
        if answer == QMessageBox.StandardButton.Yes:
            self._controller.reset_progress()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop pending timers when closing the app."""
        self._unsubscribe()
        self._controller.shutdown()
        super().closeEvent(event)
