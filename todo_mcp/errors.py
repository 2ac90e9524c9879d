"""
Server Failure Types

Canonical failure taxonomy for the Todo MCP server.
All failures raised by the server are instances of these types.

Absence is not a failure: looking up, updating or deleting an unknown id
yields None/False and never raises.
"""

from __future__ import annotations

from typing import Any


class TodoServerFailure(Exception):
    """Base class for all server failures."""

    failure_category: str = "unknown"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ContractViolation(TodoServerFailure):
    """
    The request violates MCP protocol requirements.

    - Fatality: Fatal to the request.
    - MCP Representation: JSON-RPC error response (INVALID_PARAMS).
    """

    failure_category = "contract_violation"


class ValidationFailure(ContractViolation):
    """
    Arguments for a tool or prompt failed validation.

    Raised before any handler runs, so nothing reaches the service or store.
    Every problem found is listed in ``errors``.
    """

    failure_category = "validation_failure"

    def __init__(
        self,
        name: str,
        errors: list[str],
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(f"Invalid arguments for '{name}': {'; '.join(errors)}", cause=cause)
        self.name = name
        self.errors = errors

    def to_data(self) -> dict[str, Any]:
        return {"name": self.name, "errors": self.errors}


class EnrichmentFailure(TodoServerFailure):
    """
    The connected client failed to produce a sampling result.

    - Fatality: Non-fatal. make-todo degrades to an empty fact.
    - MCP Representation: none; logged at WARNING.
    """

    failure_category = "enrichment_failure"


class StoreFailure(TodoServerFailure):
    """
    The record store could not complete an operation.

    - Fatality: Fatal to the tool call only; other records are untouched.
    - MCP Representation: ToolCallResult with isError: true.
    """

    failure_category = "store_failure"


class ToolExecutionError(TodoServerFailure):
    """A tool produced an error result that must cross the MCP SDK boundary."""

    failure_category = "tool_execution_error"


class ConfigurationError(TodoServerFailure):
    """
    The server is misconfigured and cannot operate correctly.

    - Fatality: Fatal. Raised at import/startup time.
    """

    failure_category = "configuration_error"
