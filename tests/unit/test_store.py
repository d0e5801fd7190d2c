"""Tests for the in-memory record store."""

from __future__ import annotations

import itertools
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from dyncrud.runtime.errors import RecordNotFoundError
from dyncrud.runtime.store import RecordStore, generate_id


class TestGenerateId:
    def test_canonical_uuid_string(self) -> None:
        value = generate_id()
        assert str(uuid.UUID(value)) == value

    def test_ids_differ(self) -> None:
        assert generate_id() != generate_id()


class TestCreateAndGet:
    """Creating and reading records."""

    def test_create_returns_id_and_get_returns_value(self) -> None:
        store = RecordStore()
        record_id = store.create("Task", {"title": "Learn", "completed": False})

        assert store.get("Task", record_id) == {"title": "Learn", "completed": False}
        assert store.count("Task") == 1

    def test_any_json_value_can_be_stored(self) -> None:
        store = RecordStore()
        for value in [None, True, 3, 2.5, "text", [1, {"a": None}]]:
            record_id = store.create("Anything", value)
            assert store.get("Anything", record_id) == value

    def test_get_unknown_model_raises(self) -> None:
        with pytest.raises(RecordNotFoundError) as exc_info:
            RecordStore().get("Task", "missing")
        assert exc_info.value.model_name == "Task"
        assert exc_info.value.record_id == "missing"
        assert str(exc_info.value) == "Item with ID 'missing' not found in model 'Task'"

    def test_get_unknown_id_raises(self) -> None:
        store = RecordStore()
        store.create("Task", {})
        with pytest.raises(RecordNotFoundError):
            store.get("Task", "missing")

    def test_stored_value_is_not_aliased(self) -> None:
        store = RecordStore()
        payload = {"tags": ["a"]}
        record_id = store.create("Task", payload)

        payload["tags"].append("b")
        store.get("Task", record_id)["tags"].append("c")

        assert store.get("Task", record_id) == {"tags": ["a"]}


class TestIsolation:
    """Models are separate id namespaces."""

    def test_same_id_in_two_models(self) -> None:
        store = RecordStore(id_factory=lambda: "fixed")
        store.create("A", {"model": "A"})
        store.create("B", {"model": "B"})

        assert store.get("A", "fixed") == {"model": "A"}
        assert store.get("B", "fixed") == {"model": "B"}

    def test_id_from_other_model_is_not_visible(self) -> None:
        store = RecordStore()
        record_id = store.create("B", {"x": 1})
        store.create("A", {"x": 1})

        with pytest.raises(RecordNotFoundError):
            store.get("A", record_id)


class TestUpdate:
    """Wholesale replacement."""

    def test_update_replaces_value(self) -> None:
        store = RecordStore()
        record_id = store.create("Task", {"title": "Learn", "completed": False, "extra": 1})

        updated = store.update("Task", record_id, {"title": "Master", "completed": True})

        assert updated == {"title": "Master", "completed": True}
        assert store.get("Task", record_id) == updated

    def test_update_missing_raises(self) -> None:
        store = RecordStore()
        with pytest.raises(RecordNotFoundError):
            store.update("Task", "missing", {})
        assert store.count("Task") == 0


class TestDelete:
    """Deletion is final."""

    def test_delete_then_get_and_delete_again(self) -> None:
        store = RecordStore()
        record_id = store.create("Task", {})

        store.delete("Task", record_id)

        with pytest.raises(RecordNotFoundError):
            store.get("Task", record_id)
        with pytest.raises(RecordNotFoundError):
            store.delete("Task", record_id)

    def test_delete_unknown_model_raises(self) -> None:
        with pytest.raises(RecordNotFoundError):
            RecordStore().delete("Task", "missing")


class TestConcurrency:
    """Concurrent writers never lose records."""

    def test_parallel_creates(self) -> None:
        store = RecordStore()
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda n: store.create("Task", {"n": n}), range(200)))

        assert len(set(ids)) == 200
        assert store.count("Task") == 200

    def test_parallel_deletes_succeed_once(self) -> None:
        counter = itertools.count()
        store = RecordStore(id_factory=lambda: f"id-{next(counter)}")
        record_id = store.create("Task", {})

        def attempt(_: int) -> bool:
            try:
                store.delete("Task", record_id)
            except RecordNotFoundError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(20)))

        assert results.count(True) == 1
