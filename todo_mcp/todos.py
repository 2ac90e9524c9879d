"""
Todo domain models.

``Todo`` is the only persisted entity. Field names are snake_case in Python
and camelCase on the wire (``createdAt``, ``updatedAt``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Todo(BaseModel):
    """
    A single todo item.

    - id: assigned by the store on insert, None before that
    - created_at: set once at creation
    - updated_at: refreshed on every modification, never earlier than created_at
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | None = None
    title: str = Field(..., min_length=1, description="Short title for the todo item")
    description: str | None = Field(default=None, description="Optional detailed description")
    completed: bool = Field(default=False, description="Completion status flag")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class TodoToolResponse(BaseModel):
    """Envelope returned by make-todo: the stored todo plus an optional fact."""

    todo: Todo
    fact: str = ""

    def to_wire(self) -> dict[str, Any]:
        return {"todo": self.todo.to_wire(), "fact": self.fact}
