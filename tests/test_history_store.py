"""Tests for the JSON build history."""

from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from buildstamp.constants import HISTORY_FILE
from buildstamp.models import BuildCounters, BuildRecord, BuildResult
from buildstamp.services import HistoryError, HistoryStore


def record(number: int, **kwargs: Any) -> BuildRecord:
    return BuildRecord(number=number, timestamp=datetime(2025, 3, number), **kwargs)


class TestHistoryStore:
    """Tests for HistoryStore."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        assert store.load() == []
        assert store.latest() is None
        assert store.next_number() == 1

    def test_create_writes_empty_history(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        store.create()
        assert (tmp_path / HISTORY_FILE).exists()
        assert HistoryStore.in_dir(tmp_path).load() == []

    def test_create_keeps_existing_history(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        store.append(record(1))
        HistoryStore.in_dir(tmp_path).create()
        assert len(HistoryStore.in_dir(tmp_path).load()) == 1

    def test_append_and_reload(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        store.append(record(1, counters=BuildCounters(), version="1.0.1"))
        store.append(record(2, counters=BuildCounters(builds_today=2), version="1.0.2"))

        reloaded = HistoryStore.in_dir(tmp_path)
        assert [r.version for r in reloaded.records] == ["1.0.1", "1.0.2"]
        assert reloaded.next_number() == 3
        assert reloaded.get(2) is not None
        assert reloaded.get(5) is None

    def test_append_duplicate_number(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        store.append(record(1))
        with pytest.raises(HistoryError, match="already recorded"):
            store.append(record(1))

    def test_previous(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        for n in (1, 2, 3):
            store.append(record(n))
        previous = store.previous(record(3))
        assert previous is not None
        assert previous.number == 2
        assert store.previous(record(1)) is None
        unsaved = store.previous(record(4))
        assert unsaved is not None
        assert unsaved.number == 3

    def test_update_result(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        store.append(record(1))
        updated = store.update_result(1, BuildResult.FAILURE)
        assert updated.result is BuildResult.FAILURE
        reloaded = HistoryStore.in_dir(tmp_path).get(1)
        assert reloaded is not None
        assert reloaded.result is BuildResult.FAILURE

    def test_update_unknown_build(self, tmp_path: Path) -> None:
        with pytest.raises(HistoryError, match="not found"):
            HistoryStore.in_dir(tmp_path).update_result(9, BuildResult.SUCCESS)

    def test_corrupt_file(self, tmp_path: Path) -> None:
        (tmp_path / HISTORY_FILE).write_text("{not json")
        with pytest.raises(HistoryError, match="Cannot read build history"):
            HistoryStore.in_dir(tmp_path).load()

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        store = HistoryStore.in_dir(tmp_path)
        store.append(record(1))
        assert [p.name for p in tmp_path.iterdir()] == [HISTORY_FILE]
