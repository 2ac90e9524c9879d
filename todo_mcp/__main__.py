"""Command-line entry point: ``todo-mcp`` / ``python -m todo_mcp``."""

from __future__ import annotations

import argparse
import asyncio
import logging

from .config import (
    DEFAULT_TRANSPORT,
    HTTP_HOST,
    HTTP_PORT,
    LOG_LEVEL,
    TRANSPORTS,
    configure_logging,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo-mcp",
        description="Serve todo CRUD tools and prompts over the Model Context Protocol.",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=DEFAULT_TRANSPORT,
        help="stdio (supports sampling) or http (JSON-RPC over POST /mcp)",
    )
    parser.add_argument("--host", default=HTTP_HOST, help="HTTP bind address")
    parser.add_argument("--port", type=int, default=HTTP_PORT, help="HTTP port")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.transport == "stdio":
        from .stdio import run_stdio

        asyncio.run(run_stdio())
    else:
        import uvicorn

        logger.info("Serving MCP over HTTP on %s:%s", args.host, args.port)
        uvicorn.run("todo_mcp.server:app", host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
