"""
Todo tools.

Each tool is a ToolSpec: a name, a description for LLM agents, a pydantic
model declaring its arguments, and an async handler. The argument model is
the single source of truth for both the advertised JSON Schema and the
validation applied before the handler runs.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import FACT_SYSTEM_PROMPT, FACT_USER_PROMPT_TEMPLATE
from .errors import EnrichmentFailure, ValidationFailure
from .models import Tool, ToolInputSchema
from .sampling import SamplingPeer, request_enrichment
from .service import TodoService
from .todos import Todo, TodoToolResponse

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Argument Models
# -----------------------------------------------------------------------------


class ToolArguments(BaseModel):
    """Base for tool argument models. Unknown arguments are rejected."""

    model_config = ConfigDict(extra="forbid")


class NoArguments(ToolArguments):
    pass


class TodoIdArguments(ToolArguments):
    id: int = Field(..., description="id for the Item")


class TodoFieldsArguments(ToolArguments):
    title: str = Field(..., description="Title for the Todo")
    description: str | None = Field(default=None, description="Description for the Todo")
    completed: bool = Field(default=False, description="Is the Todo completed?")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("title must not be blank")
        return s


class ChangeTodoArguments(TodoFieldsArguments):
    id: int = Field(..., description="id for the Item")


# -----------------------------------------------------------------------------
# Tool Specification
# -----------------------------------------------------------------------------

ToolHandler = Callable[[Any, SamplingPeer], Awaitable[Any]]


@dataclass
class ToolSpec:
    """
    Definition of one invocable tool.

    - name: tool name as seen by MCP clients
    - description: human-readable description for LLM agents
    - arguments: pydantic model describing and validating the arguments
    - handler: coroutine receiving the parsed arguments and the sampling peer;
      returns a JSON-ready value
    """

    name: str
    description: str
    arguments: type[ToolArguments]
    handler: ToolHandler

    def parse_arguments(self, arguments: dict[str, Any]) -> ToolArguments:
        """
        Validate raw arguments against this tool's model.

        Raises:
            ValidationFailure: listing every invalid, missing or unknown argument.
        """
        try:
            return self.arguments.model_validate(arguments)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ValidationFailure(self.name, errors, cause=e) from e

    def to_mcp_tool(self) -> Tool:
        """Build the MCP Tool definition advertised by tools/list."""
        schema = self.arguments.model_json_schema()
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=ToolInputSchema(
                properties=schema.get("properties", {}),
                required=schema.get("required", []),
            ),
        )


# -----------------------------------------------------------------------------
# Todo Tools
# -----------------------------------------------------------------------------


class TodoTools:
    """The five todo tools, delegating to a TodoService."""

    def __init__(self, service: TodoService) -> None:
        self.service = service

    async def fetch_all_todos(self, args: NoArguments, peer: SamplingPeer) -> list[dict[str, Any]]:
        return [t.to_wire() for t in self.service.list_all()]

    async def fetch_todo_by_id(self, args: TodoIdArguments, peer: SamplingPeer) -> dict[str, Any] | None:
        todo = self.service.get_by_id(args.id)
        return None if todo is None else todo.to_wire()

    async def make_todo(self, args: TodoFieldsArguments, peer: SamplingPeer) -> dict[str, Any]:
        """
        Create a todo, then ask the client for a related fact.

        The todo is persisted before enrichment starts; a failed or timed-out
        enrichment leaves it in place and yields an empty fact.
        """
        saved = self.service.create(
            Todo(title=args.title, description=args.description, completed=args.completed)
        )
        try:
            fact = await request_enrichment(
                peer,
                FACT_SYSTEM_PROMPT,
                FACT_USER_PROMPT_TEMPLATE.format(title=args.title),
            )
        except EnrichmentFailure as e:
            logger.warning("Enrichment for todo %s failed: %s", saved.id, e)
            fact = ""
        return TodoToolResponse(todo=saved, fact=fact).to_wire()

    async def change_todo(self, args: ChangeTodoArguments, peer: SamplingPeer) -> dict[str, Any] | None:
        todo = self.service.update(args.id, args.title, args.description, args.completed)
        return None if todo is None else todo.to_wire()

    async def remove_todo(self, args: TodoIdArguments, peer: SamplingPeer) -> bool:
        return self.service.delete(args.id)

    def specs(self) -> list[ToolSpec]:
        return [
            ToolSpec(
                name="fetch-all-todos",
                description="Gets all Todo items",
                arguments=NoArguments,
                handler=self.fetch_all_todos,
            ),
            ToolSpec(
                name="fetch-todo-by-id",
                description="Gets a Todo item by ID",
                arguments=TodoIdArguments,
                handler=self.fetch_todo_by_id,
            ),
            ToolSpec(
                name="make-todo",
                description="Creates a new Todo item",
                arguments=TodoFieldsArguments,
                handler=self.make_todo,
            ),
            ToolSpec(
                name="change-todo",
                description="Updates an existing Todo item",
                arguments=ChangeTodoArguments,
                handler=self.change_todo,
            ),
            ToolSpec(
                name="remove-todo",
                description="Deletes a Todo item by ID",
                arguments=TodoIdArguments,
                handler=self.remove_todo,
            ),
        ]
