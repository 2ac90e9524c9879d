"""
Record Store

Plain CRUD over Todo records keyed by integer identity. The store holds no
business rules: timestamps are stamped by the service, validation happens in
the tool layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from threading import RLock

from .errors import StoreFailure
from .todos import Todo


class TodoStore(ABC):
    """Abstract contract for todo record stores."""

    @abstractmethod
    def insert(self, todo: Todo) -> Todo:
        """Persist a new record under a freshly allocated id and return it."""

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Todo | None:
        """Return the record with this id, or None."""

    @abstractmethod
    def find_all(self) -> list[Todo]:
        """Return every record in insertion order."""

    @abstractmethod
    def replace(self, todo: Todo) -> Todo:
        """Overwrite an existing record. Raises StoreFailure if the id is unknown."""

    @abstractmethod
    def delete_by_id(self, todo_id: int) -> bool:
        """Remove a record. Return True if it existed."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored records."""


class InMemoryTodoStore(TodoStore):
    """
    Thread-safe in-memory store.

    Ids come from a monotonically increasing counter and are never reused,
    even after the record holding them is deleted. Records are copied on the
    way in and out so callers never share state with the store.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[int, Todo] = {}
        self._next_id = 1

    def insert(self, todo: Todo) -> Todo:
        with self._lock:
            todo_id = self._next_id
            self._next_id += 1
            stored = todo.model_copy(update={"id": todo_id})
            self._items[todo_id] = stored
            return stored.model_copy()

    def find_by_id(self, todo_id: int) -> Todo | None:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.model_copy()

    def find_all(self) -> list[Todo]:
        with self._lock:
            return [t.model_copy() for t in self._items.values()]

    def replace(self, todo: Todo) -> Todo:
        if todo.id is None:
            raise StoreFailure("Cannot replace a record that has no id")
        with self._lock:
            if todo.id not in self._items:
                raise StoreFailure(f"No record with id {todo.id}")
            stored = todo.model_copy()
            self._items[todo.id] = stored
            return stored.model_copy()

    def delete_by_id(self, todo_id: int) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._items)
