"""
Unit tests for the persistence adapter.

Tests load/save round trips and recovery from unreadable storage.
"""

import json
from unittest.mock import Mock

import pytest

from learning_walk.models.observation import Observation, normalize_strategies
from learning_walk.models.result import FailureKind
from learning_walk.storage.observation_store import (
    FileSlotStorage,
    InMemoryStorage,
    ObservationStore,
)


def make_observation(idx: int, **overrides) -> Observation:
    """Build a saved observation numbered idx."""
    values = {
        "id": f"2024-03-0{idx}T09:05:00.000000Z",
        "date_time": f"2024-03-0{idx}T09:00",
        "year_group": "Year 8",
        "teacher_name": f"Teacher {idx}",
        "observation_notes": 'Notes with "quotes", commas\nand newlines',
        "strategies": normalize_strategies({"coldCalling": idx % 2 == 0}),
    }
    values.update(overrides)
    return Observation(**values)


class TestObservationStore:
    """Test suite for ObservationStore."""

    @pytest.fixture
    def storage(self):
        """Create empty in-memory storage."""
        return InMemoryStorage()

    @pytest.fixture
    def store(self, storage):
        """Create store on in-memory storage."""
        return ObservationStore(storage)

    def test_load_missing_slot(self, store):
        """Test an absent slot loads as an empty collection."""
        assert store.load() == []

    def test_round_trip_preserves_order(self, store):
        """Test save then load returns equal records in the same order."""
        observations = [make_observation(3), make_observation(2), make_observation(1)]

        assert store.save(observations).is_success
        assert store.load() == observations

    def test_round_trip_empty(self, store):
        """Test an empty collection round-trips."""
        store.save([])

        assert store.load() == []

    def test_save_overwrites(self, store, storage):
        """Test save replaces the slot rather than appending."""
        store.save([make_observation(1), make_observation(2)])
        store.save([make_observation(3)])

        assert [o.id for o in store.load()] == [make_observation(3).id]
        assert len(json.loads(storage.items["learningWalks"])) == 1

    def test_stored_layout(self, store, storage):
        """Test the slot holds a JSON array in the camelCase layout."""
        store.save([make_observation(1)])

        data = json.loads(storage.items["learningWalks"])

        assert data[0]["teacherName"] == "Teacher 1"
        assert set(data[0]["strategies"]) == {
            "miniWhiteboards", "thinkPairShare", "dumtums", "coldCalling"
        }

    def test_save_partial_strategy_set(self, store, storage):
        """Test a record built with some strategy keys is stored with all four."""
        observation = make_observation(1, strategies={"coldCalling": True})

        assert store.save([observation]).is_success

        stored = json.loads(storage.items["learningWalks"])[0]["strategies"]
        assert stored == {
            "miniWhiteboards": False,
            "thinkPairShare": False,
            "dumtums": False,
            "coldCalling": True,
        }

    def test_custom_key(self, storage):
        """Test a store writes only its own slot."""
        ObservationStore(storage, key="otherWalks").save([make_observation(1)])

        assert "otherWalks" in storage.items
        assert "learningWalks" not in storage.items

    @pytest.mark.parametrize("raw", [
        "{not json",
        '{"id": "not a list"}',
        '[{"id": "x"}]',
        '[1, 2, 3]',
    ])
    def test_load_malformed_returns_empty(self, raw, caplog):
        """Test malformed slot contents load as no data and are logged."""
        store = ObservationStore(InMemoryStorage({"learningWalks": raw}))

        assert store.load() == []
        assert "Failed to load observations" in caplog.text

    def test_load_read_error_returns_empty(self):
        """Test a storage read error loads as no data."""
        storage = Mock()
        storage.get_item.side_effect = PermissionError("denied")

        assert ObservationStore(storage).load() == []

    def test_save_write_error_reported(self):
        """Test a write failure becomes a STORAGE_WRITE result."""
        storage = Mock()
        storage.set_item.side_effect = OSError("quota exceeded")

        result = ObservationStore(storage).save([make_observation(1)])

        assert result.is_failure
        assert result.kind == FailureKind.STORAGE_WRITE
        assert "quota exceeded" in result.message


class TestFileSlotStorage:
    """Test suite for FileSlotStorage."""

    def test_missing_item(self, tmp_path):
        """Test reading a slot that was never written."""
        assert FileSlotStorage(tmp_path).get_item("learningWalks") is None

    def test_set_and_get(self, tmp_path):
        """Test writing creates the directory and file."""
        storage = FileSlotStorage(tmp_path / "data")
        storage.set_item("learningWalks", "[]")

        assert storage.get_item("learningWalks") == "[]"
        assert (tmp_path / "data" / "learningWalks.json").read_text(encoding="utf-8") == "[]"

    def test_no_temp_files_left(self, tmp_path):
        """Test atomic writes clean up after themselves."""
        storage = FileSlotStorage(tmp_path)
        storage.set_item("learningWalks", "[]")
        storage.set_item("learningWalks", "[1]")

        assert [p.name for p in tmp_path.iterdir()] == ["learningWalks.json"]

    def test_invalid_key(self, tmp_path):
        """Test keys cannot escape the storage directory."""
        with pytest.raises(ValueError, match="Invalid storage key"):
            FileSlotStorage(tmp_path).path_for("../outside")

    def test_store_round_trip_on_disk(self, tmp_path):
        """Test a store on disk survives a new store instance."""
        observations = [make_observation(2), make_observation(1)]
        ObservationStore(FileSlotStorage(tmp_path)).save(observations)

        assert ObservationStore(FileSlotStorage(tmp_path)).load() == observations

    def test_corrupt_file_loads_empty(self, tmp_path):
        """Test a corrupt slot file loads as no data."""
        (tmp_path / "learningWalks.json").write_text("[{broken", encoding="utf-8")

        assert ObservationStore(FileSlotStorage(tmp_path)).load() == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
