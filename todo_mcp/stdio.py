"""
stdio MCP Server

Bridges the todo dispatcher onto the official MCP SDK's low-level Server and
runs it over stdin/stdout. Unlike the HTTP transport, the SDK session can
send requests back to the client, so make-todo gets real sampling here.
"""

from __future__ import annotations

import logging
from typing import Any

import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.session import ServerSession
from mcp.server.stdio import stdio_server

from .config import SAMPLING_MAX_TOKENS, SERVER_NAME, SERVER_VERSION
from .dispatcher import TodoMcpDispatcher, create_todo_dispatcher
from .errors import EnrichmentFailure, ToolExecutionError
from .models import GetPromptResult, Prompt, Tool, ToolCallResult

logger = logging.getLogger(__name__)


class SessionSamplingPeer:
    """SamplingPeer backed by an MCP SDK server session."""

    def __init__(self, session: ServerSession, max_tokens: int = SAMPLING_MAX_TOKENS) -> None:
        self._session = session
        self._max_tokens = max_tokens

    def supports_generation(self) -> bool:
        params = self._session.client_params
        return params is not None and params.capabilities.sampling is not None

    async def notify(self, message: str) -> None:
        await self._session.send_log_message(level="info", data=message)

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        result = await self._session.create_message(
            messages=[
                types.SamplingMessage(
                    role="user",
                    content=types.TextContent(type="text", text=user_prompt),
                )
            ],
            max_tokens=self._max_tokens,
            system_prompt=system_prompt,
        )
        content = result.content
        if isinstance(content, list):
            content = content[0] if content else None
        if not isinstance(content, types.TextContent):
            raise EnrichmentFailure("Sampling response did not contain text content")
        return content.text


# -----------------------------------------------------------------------------
# Model Conversion
# -----------------------------------------------------------------------------


def to_sdk_tool(tool: Tool) -> types.Tool:
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=tool.inputSchema.model_dump(),
    )


def to_sdk_prompt(prompt: Prompt) -> types.Prompt:
    return types.Prompt(
        name=prompt.name,
        description=prompt.description,
        arguments=[
            types.PromptArgument(name=a.name, description=a.description, required=a.required)
            for a in prompt.arguments
        ],
    )


def to_sdk_prompt_result(result: GetPromptResult) -> types.GetPromptResult:
    return types.GetPromptResult(
        description=result.description,
        messages=[
            types.PromptMessage(
                role=m.role,
                content=types.TextContent(type="text", text=m.content.text),
            )
            for m in result.messages
        ],
    )


# MCP uses the syslog severities; stdlib logging has no notice, alert or emergency.
MCP_LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "emergency": logging.CRITICAL,
}


def to_python_log_level(level: str) -> int:
    return MCP_LOG_LEVELS[level]


def to_sdk_content(result: ToolCallResult) -> list[types.TextContent]:
    """
    Convert a tool result to SDK content blocks.

    Error results are raised as ToolExecutionError; the SDK reports raised
    exceptions to the client as results with isError set.
    """
    if result.isError:
        raise ToolExecutionError("\n".join(block.text for block in result.content))
    return [types.TextContent(type="text", text=block.text) for block in result.content]


# -----------------------------------------------------------------------------
# Server
# -----------------------------------------------------------------------------


def build_server(dispatcher: TodoMcpDispatcher) -> Server:
    """Register SDK handlers that delegate to the dispatcher's registries."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [to_sdk_tool(t) for t in dispatcher.list_tools()]

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        peer = SessionSamplingPeer(server.request_context.session)
        result = await dispatcher.call_tool(name, arguments or {}, peer=peer)
        return to_sdk_content(result)

    @server.list_prompts()
    async def handle_list_prompts() -> list[types.Prompt]:
        return [to_sdk_prompt(p) for p in dispatcher.list_prompts()]

    @server.get_prompt()
    async def handle_get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
        return to_sdk_prompt_result(dispatcher.get_prompt(name, arguments or {}))

    @server.set_logging_level()
    async def handle_set_logging_level(level: types.LoggingLevel) -> None:
        logging.getLogger("todo_mcp").setLevel(to_python_log_level(level))

    return server


async def run_stdio(dispatcher: TodoMcpDispatcher | None = None) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    server = build_server(dispatcher or create_todo_dispatcher())
    logger.info("Todo MCP stdio server starting")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=SERVER_NAME,
                server_version=SERVER_VERSION,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
