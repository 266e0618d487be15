"""QTimer-backed scheduler for the session controller."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Qt, QTimer

from borderland.core.scheduler import Callback


class QtTask:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._timer.stop()
        self._timer.deleteLater()


class QtScheduler:
    """Runs callbacks on the Qt event loop, so they never overlap each other."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def call_later(self, delay: float, callback: Callback) -> QtTask:
        task, timer = self._make_task(delay, single_shot=True)

        def _fire() -> None:
            if task.active:
                task.cancel()
                callback()

        timer.timeout.connect(_fire)
        timer.start()
        return task

    def call_every(self, interval: float, callback: Callback) -> QtTask:
        task, timer = self._make_task(interval, single_shot=False)

        def _fire() -> None:
            if task.active:
                callback()

        timer.timeout.connect(_fire)
        timer.start()
        return task

    def _make_task(self, seconds: float, single_shot: bool) -> tuple[QtTask, QTimer]:
        timer = QTimer(self._parent)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.setSingleShot(single_shot)
        timer.setInterval(max(0, int(seconds * 1000)))
        return QtTask(timer), timer
