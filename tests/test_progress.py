"""Tests for borderland.core.progress – progress value and persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from borderland.core.errors import ProgressStoreError
from borderland.core.progress import (
    COMPLETED_KEY,
    UNLOCKED_KEY,
    JsonProgressStore,
    MemoryProgressStore,
    Progress,
    ProgressStore,
)


@pytest.fixture()
def store(tmp_path: Path) -> JsonProgressStore:
    """JsonProgressStore backed by a temp file so tests don't touch ~/.borderland."""
    return JsonProgressStore(tmp_path / "progress.json")


# ---------------------------------------------------------------------------
# Progress dataclass
# ---------------------------------------------------------------------------

class TestProgress:
    def test_defaults(self):
        p = Progress()
        assert p.unlocked_level == 1
        assert p.completed_levels == frozenset()
        assert p.cleared_count == 0

    def test_completing_frontier_unlocks_next(self):
        p = Progress(unlocked_level=5).with_completion(5)
        assert p.unlocked_level == 6
        assert 5 in p.completed_levels

    def test_replay_keeps_frontier(self):
        p = Progress(unlocked_level=6, completed_levels=frozenset({1, 2, 4, 5}))
        after = p.with_completion(3)
        assert after.unlocked_level == 6
        assert after.completed_levels == frozenset({1, 2, 3, 4, 5})

    def test_replay_of_completed_level_is_stable(self):
        p = Progress(unlocked_level=6, completed_levels=frozenset({3}))
        assert p.with_completion(3) == p

    def test_last_level_does_not_unlock_past_hundred(self):
        p = Progress(unlocked_level=100).with_completion(100)
        assert p.unlocked_level == 100
        assert p.is_completed(100)

    def test_original_is_unchanged(self):
        p = Progress()
        p.with_completion(1)
        assert p == Progress()

    def test_is_unlocked(self):
        p = Progress(unlocked_level=3)
        assert p.is_unlocked(1)
        assert p.is_unlocked(3)
        assert not p.is_unlocked(4)
        assert not p.is_unlocked(0)


# ---------------------------------------------------------------------------
# MemoryProgressStore
# ---------------------------------------------------------------------------

class TestMemoryStore:
    def test_load_default(self):
        assert MemoryProgressStore().load() == Progress()

    def test_save_and_count(self):
        s = MemoryProgressStore()
        s.save(Progress(unlocked_level=4))
        assert s.load().unlocked_level == 4
        assert s.saves == 1

    def test_reset(self):
        s = MemoryProgressStore(Progress(unlocked_level=9, completed_levels=frozenset({1, 2})))
        assert s.reset() == Progress()
        assert s.load() == Progress()


class TestProgressStoreBase:
    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            ProgressStore()

    def test_subclass_must_implement_save(self):
        class LoadOnly(ProgressStore):
            def load(self) -> Progress:
                return Progress()

        with pytest.raises(TypeError):
            LoadOnly()


# ---------------------------------------------------------------------------
# JsonProgressStore – fresh state and persistence
# ---------------------------------------------------------------------------

class TestJsonStore:
    def test_no_file_returns_defaults(self, store: JsonProgressStore):
        assert store.load() == Progress()

    def test_writes_two_keys(self, store: JsonProgressStore):
        store.save(Progress(unlocked_level=7, completed_levels=frozenset({6, 1, 3})))
        data = json.loads(store.file_path.read_text(encoding="utf-8"))
        assert data == {UNLOCKED_KEY: 7, COMPLETED_KEY: [1, 3, 6]}

    def test_survives_new_instance(self, store: JsonProgressStore):
        saved = Progress(unlocked_level=12, completed_levels=frozenset(range(1, 12)))
        store.save(saved)
        assert JsonProgressStore(store.file_path).load() == saved

    def test_creates_parent_directory(self, tmp_path: Path):
        s = JsonProgressStore(tmp_path / "nested" / "dir" / "progress.json")
        s.save(Progress(unlocked_level=2))
        assert s.file_path.exists()

    def test_reset(self, store: JsonProgressStore):
        store.save(Progress(unlocked_level=50))
        store.reset()
        assert store.load() == Progress()

    def test_default_path(self):
        assert JsonProgressStore().file_path == Path.home() / ".borderland" / "progress.json"

    def test_save_failure_raises(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        s = JsonProgressStore(blocker / "progress.json")
        with pytest.raises(ProgressStoreError):
            s.save(Progress())

    def test_store_error_is_os_error(self):
        assert issubclass(ProgressStoreError, OSError)


# ---------------------------------------------------------------------------
# JsonProgressStore – loading edge cases
# ---------------------------------------------------------------------------

class TestLoadEdgeCases:
    def _store_with(self, tmp_path: Path, text: str) -> JsonProgressStore:
        f = tmp_path / "progress.json"
        f.write_text(text, encoding="utf-8")
        return JsonProgressStore(f)

    def test_corrupt_json(self, tmp_path: Path):
        assert self._store_with(tmp_path, "NOT VALID JSON").load() == Progress()

    def test_not_an_object(self, tmp_path: Path):
        assert self._store_with(tmp_path, "[1, 2, 3]").load() == Progress()

    def test_missing_completed_key(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({UNLOCKED_KEY: 4}))
        assert s.load() == Progress(unlocked_level=4)

    def test_missing_unlocked_key(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({COMPLETED_KEY: [1, 2]}))
        p = s.load()
        assert p.unlocked_level == 3
        assert p.completed_levels == frozenset({1, 2})

    def test_unlocked_as_string(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({UNLOCKED_KEY: "8"}))
        assert s.load().unlocked_level == 8

    @pytest.mark.parametrize("value, expected", [(0, 1), (-4, 1), (250, 100), ("bad", 1), (None, 1)])
    def test_unlocked_sanitised(self, tmp_path: Path, value, expected):
        s = self._store_with(tmp_path, json.dumps({UNLOCKED_KEY: value}))
        assert s.load().unlocked_level == expected

    def test_completed_drops_bad_entries(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({COMPLETED_KEY: [1, "2", 0, 101, 5, True, 5]}))
        assert s.load().completed_levels == frozenset({1, 5})

    def test_completed_not_a_list(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({COMPLETED_KEY: "1,2"}))
        assert s.load().completed_levels == frozenset()

    def test_completed_beyond_frontier_moves_frontier(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({UNLOCKED_KEY: 2, COMPLETED_KEY: [1, 5]}))
        p = s.load()
        assert p.unlocked_level == 6
        assert p.completed_levels == frozenset({1, 5})

    def test_completed_last_level_caps_frontier(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({UNLOCKED_KEY: 3, COMPLETED_KEY: [100]}))
        assert s.load().unlocked_level == 100

    def test_frontier_ahead_of_completed_is_kept(self, tmp_path: Path):
        s = self._store_with(tmp_path, json.dumps({UNLOCKED_KEY: 40, COMPLETED_KEY: [1, 2]}))
        assert s.load().unlocked_level == 40
