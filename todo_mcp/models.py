"""
MCP Protocol Models

Pydantic schemas for JSON-RPC 2.0 messages as used by the Model Context Protocol,
covering the tool and prompt surfaces this server exposes.

Reference: https://modelcontextprotocol.io/specification
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from .config import MCP_PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION


# -----------------------------------------------------------------------------
# JSON-RPC 2.0 Base Types
# -----------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """
    JSON-RPC 2.0 request object.

    A request without an id member is a notification: it is processed but
    never answered. An explicit null id is an ordinary request.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None = None
    method: str
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 success response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None
    result: Any


class JsonRpcErrorData(BaseModel):
    """Structured error information."""

    code: int
    message: str
    data: Any | None = None


class JsonRpcErrorResponse(BaseModel):
    """JSON-RPC 2.0 error response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None
    error: JsonRpcErrorData


# Standard JSON-RPC error codes
class ErrorCode(int, Enum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


# -----------------------------------------------------------------------------
# Content Types
# -----------------------------------------------------------------------------


class TextContent(BaseModel):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str


# -----------------------------------------------------------------------------
# MCP Tool Types
# -----------------------------------------------------------------------------


class ToolInputSchema(BaseModel):
    """
    JSON Schema describing a tool's input parameters.

    LLM agents use this schema to construct valid tool calls.
    """

    type: Literal["object"] = "object"
    properties: dict[str, dict[str, Any]] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    additionalProperties: bool = False  # noqa: N815 (MCP spec uses camelCase)


class Tool(BaseModel):
    """MCP Tool definition."""

    name: str
    description: str
    inputSchema: ToolInputSchema  # noqa: N815


class ToolCallParams(BaseModel):
    """Parameters for tools/call method."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolCallResult(BaseModel):
    """Result of a tool invocation."""

    content: list[TextContent]
    isError: bool = False  # noqa: N815


class ListToolsResult(BaseModel):
    """Response to tools/list method."""

    tools: list[Tool]


# -----------------------------------------------------------------------------
# MCP Prompt Types
# -----------------------------------------------------------------------------


class PromptArgument(BaseModel):
    """A single named argument accepted by a prompt template."""

    name: str
    description: str
    required: bool = False


class Prompt(BaseModel):
    """MCP Prompt definition."""

    name: str
    description: str
    arguments: list[PromptArgument] = Field(default_factory=list)


class PromptMessage(BaseModel):
    """One message of a rendered prompt."""

    role: Literal["user", "assistant"] = "user"
    content: TextContent


class GetPromptParams(BaseModel):
    """Parameters for prompts/get method."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class GetPromptResult(BaseModel):
    """A rendered prompt: a short title plus the instruction messages."""

    description: str
    messages: list[PromptMessage]


class ListPromptsResult(BaseModel):
    """Response to prompts/list method."""

    prompts: list[Prompt]


# -----------------------------------------------------------------------------
# MCP Method Responses
# -----------------------------------------------------------------------------


class InitializeResult(BaseModel):
    """Response to initialize method."""

    protocolVersion: str = MCP_PROTOCOL_VERSION  # noqa: N815
    serverInfo: dict[str, str] = Field(  # noqa: N815
        default_factory=lambda: {"name": SERVER_NAME, "version": SERVER_VERSION}
    )
    capabilities: dict[str, Any] = Field(
        default_factory=lambda: {
            "tools": {"listChanged": False},
            "prompts": {"listChanged": False},
        }
    )


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------


def make_error_response(
    request_id: int | str | None,
    code: ErrorCode,
    message: str,
    data: Any | None = None,
) -> JsonRpcErrorResponse:
    """Construct a JSON-RPC error response."""
    return JsonRpcErrorResponse(
        id=request_id,
        error=JsonRpcErrorData(code=code.value, message=message, data=data),
    )


def make_success_response(request_id: int | str | None, result: Any) -> JsonRpcResponse:
    """Construct a JSON-RPC success response."""
    return JsonRpcResponse(id=request_id, result=result)
