"""
Todo Service

Business façade over a TodoStore. Adds timestamp stamping and nothing else;
a missing id is reported as None/False rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from .store import TodoStore
from .todos import Todo

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TodoService:
    """
    CRUD operations on todos with creation/update timestamps.

    The store is injected at construction; the clock is injectable so tests
    can control time.
    """

    def __init__(self, store: TodoStore, clock: Callable[[], datetime] = utcnow) -> None:
        self.store = store
        self._clock = clock

    def list_all(self) -> list[Todo]:
        return self.store.find_all()

    def get_by_id(self, todo_id: int) -> Todo | None:
        return self.store.find_by_id(todo_id)

    def create(self, candidate: Todo) -> Todo:
        """Persist a new todo. Caller-supplied id and timestamps are ignored."""
        now = self._clock()
        todo = candidate.model_copy(update={"id": None, "created_at": now, "updated_at": now})
        saved = self.store.insert(todo)
        logger.info("Created todo %s", saved.id)
        return saved

    def update(
        self,
        todo_id: int,
        title: str,
        description: str | None,
        completed: bool,
    ) -> Todo | None:
        """
        Replace the mutable fields of an existing todo.

        Returns None without writing when the id is unknown.
        """
        existing = self.store.find_by_id(todo_id)
        if existing is None:
            return None

        changed = existing.model_copy(
            update={
                "title": title,
                "description": description,
                "completed": completed,
                "updated_at": self._next_stamp(existing),
            }
        )
        saved = self.store.replace(changed)
        logger.info("Updated todo %s", todo_id)
        return saved

    def delete(self, todo_id: int) -> bool:
        deleted = self.store.delete_by_id(todo_id)
        if deleted:
            logger.info("Deleted todo %s", todo_id)
        return deleted

    def _next_stamp(self, existing: Todo) -> datetime:
        # updated_at must move strictly forward even on coarse clocks
        now = self._clock()
        floor = existing.updated_at or existing.created_at
        if floor is not None and now <= floor:
            return floor + _TICK
        return now
