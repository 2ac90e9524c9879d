"""
Shared test fixtures for the Todo MCP server tests.

Provides a fresh store, service and dispatcher per test, plus fake sampling
peers that record what the server asked of them.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from todo_mcp.dispatcher import TodoMcpDispatcher, create_todo_dispatcher
from todo_mcp.service import TodoService
from todo_mcp.store import InMemoryTodoStore


# -----------------------------------------------------------------------------
# Fake Sampling Peers
# -----------------------------------------------------------------------------


class FakeSamplingPeer:
    """
    Sampling peer with scripted behavior.

    Args:
        supported: whether the client "advertised" sampling
        reply: text returned by generate()
        error: exception raised by generate() instead of replying
        delay: seconds generate() sleeps before replying
    """

    def __init__(
        self,
        supported: bool = True,
        reply: str = "Lists were used by ancient Sumerians.",
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.supported = supported
        self.reply = reply
        self.error = error
        self.delay = delay
        self.notices: list[str] = []
        self.generations: list[tuple[str, str]] = []

    def supports_generation(self) -> bool:
        return self.supported

    async def notify(self, message: str) -> None:
        self.notices.append(message)

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.generations.append((system_prompt, user_prompt))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


class SteppingClock:
    """Clock that advances one second on every reading."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class FrozenClock:
    """Clock that always returns the same instant."""

    def __init__(self, instant: datetime | None = None) -> None:
        self.instant = instant or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.instant


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def store() -> InMemoryTodoStore:
    return InMemoryTodoStore()


@pytest.fixture
def service(store: InMemoryTodoStore) -> TodoService:
    return TodoService(store)


@pytest.fixture
def dispatcher(store: InMemoryTodoStore) -> TodoMcpDispatcher:
    return create_todo_dispatcher(store)


@pytest.fixture
def sampling_peer() -> FakeSamplingPeer:
    return FakeSamplingPeer()


@pytest.fixture
def silent_peer() -> FakeSamplingPeer:
    """A client that did not advertise sampling."""
    return FakeSamplingPeer(supported=False)
