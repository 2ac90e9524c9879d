"""
HTTP MCP Server

FastAPI application exposing the todo dispatcher as an MCP endpoint.
Handles JSON-RPC 2.0 over HTTP POST.

Plain request/response HTTP cannot carry server-initiated requests, so
sampling is never available here and make-todo always returns an empty
fact. Use the stdio transport for enrichment.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import SERVER_VERSION
from .dispatcher import TodoMcpDispatcher, create_todo_dispatcher
from .models import ErrorCode, JsonRpcRequest, make_error_response
from .sampling import NullSamplingPeer

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Application Lifecycle
# -----------------------------------------------------------------------------

dispatcher: TodoMcpDispatcher | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create a fresh store and dispatcher for the lifetime of the app."""
    global dispatcher
    dispatcher = create_todo_dispatcher()
    logger.info("Todo MCP HTTP server started")
    yield
    dispatcher = None


# -----------------------------------------------------------------------------
# FastAPI Application
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Todo MCP Server",
    description="Exposes CRUD operations on todo items as MCP tools and prompts.",
    version=SERVER_VERSION,
    lifespan=lifespan,
)


@app.post("/mcp")
async def mcp_endpoint(request: Request) -> Response:
    """
    Main MCP endpoint accepting JSON-RPC 2.0 requests.

    Notifications are acknowledged with 202 and no body.
    """
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Dispatcher not initialized")

    # Parse raw JSON to handle malformed requests gracefully
    try:
        body = await request.json()
    except Exception:
        error = make_error_response(None, ErrorCode.PARSE_ERROR, "Invalid JSON")
        return JSONResponse(content=error.model_dump(), status_code=200)

    try:
        rpc_request = JsonRpcRequest(**body)
    except (TypeError, ValidationError) as e:
        error = make_error_response(
            body.get("id") if isinstance(body, dict) else None,
            ErrorCode.INVALID_REQUEST,
            f"Invalid request: {e}",
        )
        return JSONResponse(content=error.model_dump(), status_code=200)

    response = await dispatcher.handle_request(rpc_request, peer=NullSamplingPeer())
    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response.model_dump(), status_code=200)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/tools")
async def list_tools() -> dict[str, Any]:
    """
    Convenience endpoint to list available tools.

    Not part of MCP - useful for debugging. Clients use tools/list.
    """
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Dispatcher not initialized")

    return {"tools": [t.model_dump() for t in dispatcher.list_tools()]}
