"""
Todo prompt templates.

Static, side-effect free generators of instruction text for the client to act on.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import ValidationFailure
from .models import GetPromptResult, Prompt, PromptArgument, PromptMessage, TextContent


def _user_prompt(description: str, text: str) -> GetPromptResult:
    return GetPromptResult(
        description=description,
        messages=[PromptMessage(role="user", content=TextContent(text=text))],
    )


def create_todo_prompt(title: str) -> GetPromptResult:
    return _user_prompt("Create a new Todo Item", f"Add this {title} as a new todo item.")


def list_todos_prompt() -> GetPromptResult:
    return _user_prompt("List all Todo Items", "List all the todo items.")


@dataclass
class PromptSpec:
    """A named prompt template and the arguments it accepts."""

    name: str
    description: str
    render: Callable[..., GetPromptResult]
    arguments: list[PromptArgument] = field(default_factory=list)

    def validate_arguments(self, arguments: dict[str, Any]) -> list[str]:
        """Return a list of validation errors. Empty list = valid."""
        errors: list[str] = []
        known = {a.name for a in self.arguments}

        for arg in arguments:
            if arg not in known:
                errors.append(
                    f"Unknown argument '{arg}' - prompt '{self.name}' does not accept this parameter"
                )

        for arg in self.arguments:
            if not arg.required:
                continue
            value = arguments.get(arg.name)
            if value is None or not str(value).strip():
                errors.append(f"Missing required argument: '{arg.name}'")

        return errors

    def get(self, arguments: dict[str, Any]) -> GetPromptResult:
        errors = self.validate_arguments(arguments)
        if errors:
            raise ValidationFailure(self.name, errors)
        return self.render(**{k: str(v) for k, v in arguments.items()})

    def to_mcp_prompt(self) -> Prompt:
        return Prompt(name=self.name, description=self.description, arguments=self.arguments)


TODO_PROMPTS: list[PromptSpec] = [
    PromptSpec(
        name="create-todo-prompt",
        description="Prompt to create a new Todo item",
        render=create_todo_prompt,
        arguments=[
            PromptArgument(name="title", description="Title of the Todo item", required=True),
        ],
    ),
    PromptSpec(
        name="list-todos-prompt",
        description="Prompt to list all Todo items",
        render=list_todos_prompt,
    ),
]
