"""Todo MCP server package."""

from .config import (
    MCP_PROTOCOL_VERSION,
    SAMPLING_MAX_TOKENS,
    SAMPLING_TIMEOUT_SECONDS,
    SERVER_NAME,
    SERVER_VERSION,
)
from .dispatcher import TodoMcpDispatcher, create_todo_dispatcher
from .errors import (
    ConfigurationError,
    ContractViolation,
    EnrichmentFailure,
    StoreFailure,
    TodoServerFailure,
    ToolExecutionError,
    ValidationFailure,
)
from .models import (
    ErrorCode,
    GetPromptResult,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    Prompt,
    PromptArgument,
    PromptMessage,
    TextContent,
    Tool,
    ToolCallResult,
    ToolInputSchema,
    make_error_response,
    make_success_response,
)
from .prompts import TODO_PROMPTS, PromptSpec, create_todo_prompt, list_todos_prompt
from .sampling import NullSamplingPeer, SamplingPeer, request_enrichment
from .service import TodoService
from .store import InMemoryTodoStore, TodoStore
from .todos import Todo, TodoToolResponse
from .tools import TodoTools, ToolSpec

__all__ = [
    # Dispatcher
    "TodoMcpDispatcher",
    "create_todo_dispatcher",
    # Domain
    "Todo",
    "TodoToolResponse",
    "TodoStore",
    "InMemoryTodoStore",
    "TodoService",
    "TodoTools",
    "ToolSpec",
    # Prompts
    "TODO_PROMPTS",
    "PromptSpec",
    "create_todo_prompt",
    "list_todos_prompt",
    # Sampling
    "SamplingPeer",
    "NullSamplingPeer",
    "request_enrichment",
    # Config
    "SERVER_NAME",
    "SERVER_VERSION",
    "MCP_PROTOCOL_VERSION",
    "SAMPLING_TIMEOUT_SECONDS",
    "SAMPLING_MAX_TOKENS",
    # Errors
    "TodoServerFailure",
    "ContractViolation",
    "ValidationFailure",
    "EnrichmentFailure",
    "StoreFailure",
    "ToolExecutionError",
    "ConfigurationError",
    # Models
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcErrorResponse",
    "ErrorCode",
    "Tool",
    "ToolInputSchema",
    "ToolCallResult",
    "TextContent",
    "Prompt",
    "PromptArgument",
    "PromptMessage",
    "GetPromptResult",
    "make_error_response",
    "make_success_response",
]
