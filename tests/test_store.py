"""Tests for the in-memory record store."""

import threading

import pytest

from todo_mcp.errors import StoreFailure
from todo_mcp.store import InMemoryTodoStore
from todo_mcp.todos import Todo


class TestInMemoryTodoStore:
    def test_empty_store(self, store):
        assert store.find_all() == []
        assert store.count() == 0

    def test_insert_assigns_sequential_ids(self, store):
        first = store.insert(Todo(title="a"))
        second = store.insert(Todo(title="b"))

        assert first.id == 1
        assert second.id == 2

    def test_insert_ignores_supplied_id(self, store):
        saved = store.insert(Todo(id=42, title="a"))
        assert saved.id == 1
        assert store.find_by_id(42) is None

    def test_ids_not_reused_after_delete(self, store):
        first = store.insert(Todo(title="a"))
        assert store.delete_by_id(first.id)

        second = store.insert(Todo(title="b"))
        assert second.id != first.id

    def test_find_all_keeps_insertion_order(self, store):
        for title in ["one", "two", "three"]:
            store.insert(Todo(title=title))
        assert [t.title for t in store.find_all()] == ["one", "two", "three"]

    def test_returned_records_are_copies(self, store):
        saved = store.insert(Todo(title="original"))
        saved.title = "mutated"

        assert store.find_by_id(saved.id).title == "original"

    def test_replace_existing(self, store):
        saved = store.insert(Todo(title="a"))
        replaced = store.replace(saved.model_copy(update={"title": "b"}))

        assert replaced.title == "b"
        assert store.find_by_id(saved.id).title == "b"
        assert store.count() == 1

    def test_replace_unknown_id_fails(self, store):
        with pytest.raises(StoreFailure):
            store.replace(Todo(id=99, title="ghost"))

    def test_replace_without_id_fails(self, store):
        with pytest.raises(StoreFailure):
            store.replace(Todo(title="no id"))

    def test_delete_missing_returns_false(self, store):
        assert store.delete_by_id(5) is False

    def test_concurrent_inserts_get_unique_ids(self):
        store = InMemoryTodoStore()
        ids: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(50):
                saved = store.insert(Todo(title="t"))
                with lock:
                    ids.append(saved.id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ids) == 400
        assert len(set(ids)) == 400
        assert store.count() == 400
