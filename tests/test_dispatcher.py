"""
Tests for JSON-RPC routing in the dispatcher.

Covers method routing and error mapping; tool semantics live in test_tools.py.
"""

import json

import pytest

from todo_mcp.config import MCP_PROTOCOL_VERSION, SERVER_NAME
from todo_mcp.dispatcher import TodoMcpDispatcher
from todo_mcp.errors import ContractViolation
from todo_mcp.models import ErrorCode, JsonRpcRequest
from todo_mcp.prompts import TODO_PROMPTS


class TestRegistry:
    def test_duplicate_tool_rejected(self, dispatcher):
        with pytest.raises(ContractViolation):
            dispatcher.register_tool(dispatcher.tools["make-todo"])

    def test_duplicate_prompt_rejected(self):
        with pytest.raises(ContractViolation):
            TodoMcpDispatcher(prompts=TODO_PROMPTS + TODO_PROMPTS[:1])

    def test_empty_dispatcher(self):
        dispatcher = TodoMcpDispatcher()
        assert dispatcher.list_tools() == []
        assert dispatcher.list_prompts() == []


class TestHandleRequest:
    @pytest.mark.asyncio
    async def test_initialize(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id=1, method="initialize"))

        assert response.id == 1
        assert response.result["protocolVersion"] == MCP_PROTOCOL_VERSION
        assert response.result["serverInfo"]["name"] == SERVER_NAME
        assert "tools" in response.result["capabilities"]
        assert "prompts" in response.result["capabilities"]

    @pytest.mark.asyncio
    async def test_ping(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id="p", method="ping"))
        assert response.result == {}

    @pytest.mark.asyncio
    async def test_notification_gets_no_response(self, dispatcher):
        request = JsonRpcRequest(method="notifications/initialized")
        assert await dispatcher.handle_request(request) is None

    @pytest.mark.asyncio
    async def test_tools_list(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id=2, method="tools/list"))

        assert response.id == 2
        assert len(response.result["tools"]) == 5
        assert all("inputSchema" in t for t in response.result["tools"])

    @pytest.mark.asyncio
    async def test_tools_call(self, dispatcher, silent_peer):
        request = JsonRpcRequest(
            id=3,
            method="tools/call",
            params={"name": "make-todo", "arguments": {"title": "Buy milk"}},
        )

        response = await dispatcher.handle_request(request, peer=silent_peer)

        assert response.id == 3
        assert response.result["isError"] is False
        payload = json.loads(response.result["content"][0]["text"])
        assert payload["todo"]["title"] == "Buy milk"
        assert payload["fact"] == ""

    @pytest.mark.asyncio
    async def test_tools_call_passes_peer(self, dispatcher, sampling_peer):
        request = JsonRpcRequest(
            id=4,
            method="tools/call",
            params={"name": "make-todo", "arguments": {"title": "Stretch"}},
        )

        response = await dispatcher.handle_request(request, peer=sampling_peer)

        payload = json.loads(response.result["content"][0]["text"])
        assert payload["fact"] == sampling_peer.reply
        assert len(sampling_peer.generations) == 1

    @pytest.mark.asyncio
    async def test_tools_call_missing_params(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id=5, method="tools/call"))

        assert response.error.code == ErrorCode.INVALID_PARAMS
        assert "Missing params" in response.error.message

    @pytest.mark.asyncio
    async def test_tools_call_invalid_params(self, dispatcher):
        request = JsonRpcRequest(id=6, method="tools/call", params={"arguments": {}})
        response = await dispatcher.handle_request(request)

        assert response.error.code == ErrorCode.INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_tools_call_unknown_tool(self, dispatcher):
        request = JsonRpcRequest(id=7, method="tools/call", params={"name": "nope"})
        response = await dispatcher.handle_request(request)

        assert response.error.code == ErrorCode.INVALID_PARAMS
        assert "Unknown tool" in response.error.message

    @pytest.mark.asyncio
    async def test_tools_call_validation_error_data(self, dispatcher, store):
        request = JsonRpcRequest(
            id=8,
            method="tools/call",
            params={"name": "make-todo", "arguments": {"title": "  "}},
        )

        response = await dispatcher.handle_request(request)

        assert response.error.code == ErrorCode.INVALID_PARAMS
        assert response.error.data["name"] == "make-todo"
        assert response.error.data["errors"]
        assert store.count() == 0

    @pytest.mark.asyncio
    async def test_prompts_list(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id=9, method="prompts/list"))

        names = [p["name"] for p in response.result["prompts"]]
        assert names == ["create-todo-prompt", "list-todos-prompt"]

    @pytest.mark.asyncio
    async def test_prompts_get(self, dispatcher):
        request = JsonRpcRequest(
            id=10,
            method="prompts/get",
            params={"name": "create-todo-prompt", "arguments": {"title": "Buy milk"}},
        )

        response = await dispatcher.handle_request(request)

        assert response.result["description"] == "Create a new Todo Item"
        assert response.result["messages"][0]["role"] == "user"
        assert response.result["messages"][0]["content"]["text"] == "Add this Buy milk as a new todo item."

    @pytest.mark.asyncio
    async def test_prompts_get_missing_argument(self, dispatcher):
        request = JsonRpcRequest(
            id=11,
            method="prompts/get",
            params={"name": "create-todo-prompt"},
        )

        response = await dispatcher.handle_request(request)

        assert response.error.code == ErrorCode.INVALID_PARAMS
        assert response.error.data["errors"] == ["Missing required argument: 'title'"]

    @pytest.mark.asyncio
    async def test_prompts_get_missing_params(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id=12, method="prompts/get"))
        assert response.error.code == ErrorCode.INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_prompts_get_unknown(self, dispatcher):
        request = JsonRpcRequest(id=13, method="prompts/get", params={"name": "nope"})
        response = await dispatcher.handle_request(request)

        assert response.error.code == ErrorCode.INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_unknown_method(self, dispatcher):
        response = await dispatcher.handle_request(JsonRpcRequest(id=14, method="unknown/method"))

        assert response.error.code == ErrorCode.METHOD_NOT_FOUND
        assert "Unknown method" in response.error.message
