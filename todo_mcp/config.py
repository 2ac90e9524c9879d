"""
Centralized configuration for the Todo MCP server.

All magic values, prompt texts, and constants in one place.
Supports environment variable overrides for deployment flexibility.
"""

from __future__ import annotations

import logging
import os
import sys

from .errors import ConfigurationError


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", cause=e) from e


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", cause=e) from e


# -----------------------------------------------------------------------------
# Server Configuration
# -----------------------------------------------------------------------------

SERVER_NAME = os.environ.get("TODO_MCP_SERVER_NAME", "todo-mcp-server")
SERVER_VERSION = "0.1.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

TRANSPORTS = ("stdio", "http")
DEFAULT_TRANSPORT = os.environ.get("TODO_MCP_TRANSPORT", "stdio")

# -----------------------------------------------------------------------------
# HTTP Configuration
# -----------------------------------------------------------------------------

HTTP_HOST = os.environ.get("TODO_MCP_HTTP_HOST", "127.0.0.1")
HTTP_PORT = _env_int("TODO_MCP_HTTP_PORT", 8000)

# -----------------------------------------------------------------------------
# Sampling (Enrichment) Configuration
# -----------------------------------------------------------------------------

SAMPLING_TIMEOUT_SECONDS = _env_float("TODO_MCP_SAMPLING_TIMEOUT", 30.0)
SAMPLING_MAX_TOKENS = _env_int("TODO_MCP_SAMPLING_MAX_TOKENS", 200)
SAMPLING_START_NOTICE = "Start sampling"

FACT_SYSTEM_PROMPT = (
    "You are an expert todo list assistant. "
    "Provide an interesting fact related to todo lists or productivity."
)
FACT_USER_PROMPT_TEMPLATE = "Share an interesting fact about this todo item: {title}"

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("TODO_MCP_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send log records to stderr; stdout is reserved for the stdio transport."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr, force=True)
