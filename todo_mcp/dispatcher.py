"""
MCP Dispatcher

Routes MCP JSON-RPC requests to the tool and prompt registries. This is the
one place where protocol messages meet the todo tools; both the HTTP and the
stdio transports go through it.

The dispatcher:
1. Holds explicit registries mapping tool and prompt names to their specs
2. Validates arguments before any handler runs
3. Invokes handlers and wraps their results as MCP content blocks
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .errors import ContractViolation, StoreFailure, ValidationFailure
from .models import (
    ErrorCode,
    GetPromptParams,
    GetPromptResult,
    InitializeResult,
    JsonRpcErrorResponse,
    JsonRpcRequest,
    JsonRpcResponse,
    ListPromptsResult,
    ListToolsResult,
    Prompt,
    TextContent,
    Tool,
    ToolCallParams,
    ToolCallResult,
    make_error_response,
    make_success_response,
)
from .prompts import TODO_PROMPTS, PromptSpec
from .sampling import NullSamplingPeer, SamplingPeer
from .service import TodoService
from .store import InMemoryTodoStore, TodoStore
from .tools import TodoTools, ToolSpec

logger = logging.getLogger(__name__)


class TodoMcpDispatcher:
    """
    Serves todo tools and prompts over MCP.

    Requests flow through handle_request(); programmatic callers may use
    call_tool() and get_prompt() directly.
    """

    def __init__(
        self,
        tools: list[ToolSpec] | None = None,
        prompts: list[PromptSpec] | None = None,
    ) -> None:
        self.tools: dict[str, ToolSpec] = {}
        self.prompts: dict[str, PromptSpec] = {}

        for tool in tools or []:
            self.register_tool(tool)
        for prompt in prompts or []:
            self.register_prompt(prompt)

    def register_tool(self, tool: ToolSpec) -> None:
        if tool.name in self.tools:
            raise ContractViolation(f"Duplicate tool name: {tool.name}")
        self.tools[tool.name] = tool

    def register_prompt(self, prompt: PromptSpec) -> None:
        if prompt.name in self.prompts:
            raise ContractViolation(f"Duplicate prompt name: {prompt.name}")
        self.prompts[prompt.name] = prompt

    def list_tools(self) -> list[Tool]:
        """Return all registered tools in MCP format."""
        return [tool.to_mcp_tool() for tool in self.tools.values()]

    def list_prompts(self) -> list[Prompt]:
        return [prompt.to_mcp_prompt() for prompt in self.prompts.values()]

    async def call_tool(
        self,
        name: str,
        arguments: dict[str, Any],
        peer: SamplingPeer | None = None,
    ) -> ToolCallResult:
        """
        Execute a tool.

        Flow:
        1. Look up the tool (unknown name raises ContractViolation)
        2. Validate arguments (invalid raises ValidationFailure)
        3. Run the handler
        4. Wrap the JSON result as a text content block

        Store failures are returned as results with isError set; they are
        fatal to this call only.
        """
        if name not in self.tools:
            raise ContractViolation(f"Unknown tool: {name}")

        tool = self.tools[name]
        args = tool.parse_arguments(arguments)
        logger.debug("Calling tool %s", name)

        try:
            value = await tool.handler(args, peer or NullSamplingPeer())
        except StoreFailure as e:
            logger.error("Tool %s failed: %s", name, e)
            return ToolCallResult(
                content=[TextContent(text=f"Store error: {e!s}")],
                isError=True,
            )

        return ToolCallResult(content=[TextContent(text=json.dumps(value, indent=2))])

    def get_prompt(self, name: str, arguments: dict[str, Any]) -> GetPromptResult:
        if name not in self.prompts:
            raise ContractViolation(f"Unknown prompt: {name}")
        return self.prompts[name].get(arguments)

    async def handle_request(
        self,
        request: JsonRpcRequest,
        peer: SamplingPeer | None = None,
    ) -> JsonRpcResponse | JsonRpcErrorResponse | None:
        """
        Single entry point for all MCP operations.

        Supported methods:
            initialize    → server capabilities
            ping          → empty result
            tools/list    → available tools
            tools/call    → execute tool
            prompts/list  → available prompts
            prompts/get   → render prompt

        Notifications are accepted and return None.
        """
        if request.is_notification:
            logger.debug("Notification received: %s", request.method)
            return None

        match request.method:
            case "initialize":
                return make_success_response(request.id, InitializeResult().model_dump())

            case "ping":
                return make_success_response(request.id, {})

            case "tools/list":
                list_result = ListToolsResult(tools=self.list_tools())
                return make_success_response(request.id, list_result.model_dump())

            case "tools/call":
                return await self._handle_tools_call(request, peer)

            case "prompts/list":
                prompts_result = ListPromptsResult(prompts=self.list_prompts())
                return make_success_response(request.id, prompts_result.model_dump())

            case "prompts/get":
                return self._handle_prompts_get(request)

            case _:
                return make_error_response(
                    request.id,
                    ErrorCode.METHOD_NOT_FOUND,
                    f"Unknown method: {request.method}",
                )

    async def _handle_tools_call(
        self, request: JsonRpcRequest, peer: SamplingPeer | None
    ) -> JsonRpcResponse | JsonRpcErrorResponse:
        if request.params is None:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                "Missing params for tools/call",
            )

        try:
            params = ToolCallParams(**request.params)
        except Exception as e:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                f"Invalid params: {e}",
            )

        try:
            call_result = await self.call_tool(params.name, params.arguments, peer)
        except ValidationFailure as e:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                str(e),
                data=e.to_data(),
            )
        except ContractViolation as e:
            return make_error_response(request.id, ErrorCode.INVALID_PARAMS, str(e))

        return make_success_response(request.id, call_result.model_dump())

    def _handle_prompts_get(self, request: JsonRpcRequest) -> JsonRpcResponse | JsonRpcErrorResponse:
        if request.params is None:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                "Missing params for prompts/get",
            )

        try:
            params = GetPromptParams(**request.params)
        except Exception as e:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                f"Invalid params: {e}",
            )

        try:
            prompt_result = self.get_prompt(params.name, params.arguments)
        except ValidationFailure as e:
            return make_error_response(
                request.id,
                ErrorCode.INVALID_PARAMS,
                str(e),
                data=e.to_data(),
            )
        except ContractViolation as e:
            return make_error_response(request.id, ErrorCode.INVALID_PARAMS, str(e))

        return make_success_response(request.id, prompt_result.model_dump())


# -----------------------------------------------------------------------------
# Factory Functions
# -----------------------------------------------------------------------------


def create_todo_dispatcher(store: TodoStore | None = None) -> TodoMcpDispatcher:
    """Create a dispatcher serving the todo tools and prompts over the given store."""
    service = TodoService(store if store is not None else InMemoryTodoStore())
    return TodoMcpDispatcher(tools=TodoTools(service).specs(), prompts=TODO_PROMPTS)
