"""Port: LLM gateway — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class LlmGateway(Protocol):
    """Abstract contract for interacting with a large-language model."""

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Send role-tagged chat messages and return the completion text.

        Returns ``None`` when the provider answered without usable text and
        raises :class:`~lyrics_generator.domain.exceptions.LlmError` on any
        transport or provider failure.
        """
        ...
