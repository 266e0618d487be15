"""Tests for borderland.core.scheduler – virtual clock scheduler."""

from __future__ import annotations

import pytest

from borderland.core.scheduler import ManualScheduler


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


class TestCallLater:
    def test_fires_once_when_due(self, scheduler: ManualScheduler):
        calls = []
        task = scheduler.call_later(2, lambda: calls.append(scheduler.now))
        scheduler.advance(1)
        assert calls == []
        assert task.active
        scheduler.advance(1)
        assert calls == [2]
        assert not task.active
        scheduler.advance(10)
        assert calls == [2]

    def test_cancel(self, scheduler: ManualScheduler):
        calls = []
        task = scheduler.call_later(1, lambda: calls.append(1))
        task.cancel()
        scheduler.advance(5)
        assert calls == []
        assert scheduler.pending == 0


class TestCallEvery:
    def test_repeats(self, scheduler: ManualScheduler):
        calls = []
        scheduler.call_every(1, lambda: calls.append(scheduler.now))
        scheduler.advance(3)
        assert calls == [1, 2, 3]

    def test_cancel_from_callback(self, scheduler: ManualScheduler):
        calls = []

        def _tick():
            calls.append(scheduler.now)
            if len(calls) == 2:
                task.cancel()

        task = scheduler.call_every(1, _tick)
        scheduler.advance(10)
        assert calls == [1, 2]

    def test_rejects_non_positive_interval(self, scheduler: ManualScheduler):
        with pytest.raises(ValueError):
            scheduler.call_every(0, lambda: None)


class TestClock:
    def test_time_order_across_tasks(self, scheduler: ManualScheduler):
        order = []
        scheduler.call_every(10, lambda: order.append("hint"))
        scheduler.call_every(3, lambda: order.append("tick"))
        scheduler.advance(10)
        assert order == ["tick", "tick", "tick", "hint"]

    def test_now_moves_to_target(self, scheduler: ManualScheduler):
        scheduler.advance(2.5)
        assert scheduler.now == 2.5

    def test_backwards_rejected(self, scheduler: ManualScheduler):
        with pytest.raises(ValueError):
            scheduler.advance(-1)

    def test_task_scheduled_during_advance_fires_in_same_advance(self, scheduler: ManualScheduler):
        calls = []
        scheduler.call_later(1, lambda: scheduler.call_later(1, lambda: calls.append(scheduler.now)))
        scheduler.advance(3)
        assert calls == [2]

    def test_pending(self, scheduler: ManualScheduler):
        scheduler.call_later(1, lambda: None)
        scheduler.call_every(1, lambda: None)
        assert scheduler.pending == 2
