"""
Sampling (enrichment) client.

Asks the connected MCP client to generate a short text on the server's
behalf. The client must have advertised the sampling capability; when it has
not, enrichment is skipped and an empty string comes back.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from .config import SAMPLING_START_NOTICE, SAMPLING_TIMEOUT_SECONDS
from .errors import EnrichmentFailure

logger = logging.getLogger(__name__)


class SamplingPeer(Protocol):
    """The connected client, as seen by the enrichment client."""

    def supports_generation(self) -> bool:
        """True if the client advertised the sampling capability."""
        ...

    async def notify(self, message: str) -> None:
        """Send a fire-and-forget informational notice to the client."""
        ...

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Run one single-turn generation and return its text."""
        ...


class NullSamplingPeer:
    """
    A peer that never supports sampling.

    Used by the HTTP transport: a plain request/response POST cannot carry
    server-initiated requests back to the client.
    """

    def supports_generation(self) -> bool:
        return False

    async def notify(self, message: str) -> None:
        return None

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        raise EnrichmentFailure("Sampling is not available on this transport")


async def request_enrichment(
    peer: SamplingPeer,
    system_prompt: str,
    user_prompt: str,
    *,
    timeout: float = SAMPLING_TIMEOUT_SECONDS,
) -> str:
    """
    Ask the peer for generated text.

    Returns "" without contacting the peer if sampling is not advertised.
    Otherwise sends a start notice followed by one generation request, both
    bounded by ``timeout`` seconds.

    Raises:
        EnrichmentFailure: the peer failed, timed out, or returned no text.
    """
    if not system_prompt or not user_prompt:
        raise ValueError("system_prompt and user_prompt must be non-empty")

    if not peer.supports_generation():
        logger.debug("Client does not support sampling; skipping enrichment")
        return ""

    async def _sample() -> str:
        await peer.notify(SAMPLING_START_NOTICE)
        return await peer.generate(system_prompt, user_prompt)

    try:
        return await asyncio.wait_for(_sample(), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise EnrichmentFailure(f"Sampling timed out after {timeout}s", cause=e) from e
    except EnrichmentFailure:
        raise
    except Exception as e:
        raise EnrichmentFailure(f"Sampling failed: {e!s}", cause=e) from e
