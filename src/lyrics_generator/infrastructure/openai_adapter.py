"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import httpx
from openai import AsyncOpenAI, AuthenticationError, RateLimitError

from lyrics_generator.domain.exceptions import LlmError


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API.

    The SDK's built-in retries are switched off: every call is a single
    attempt that either yields text or fails.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            max_retries=0,
            http_client=http_client,
        )
        self._model = model

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Send the role-tagged *messages* and return the first choice's text."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,  # type: ignore[arg-type]
                temperature=temperature,
                max_tokens=max_tokens,
            )

            if not response.choices:
                return None
            content = response.choices[0].message.content
            return content or None

        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            raise LlmError(f"OpenAI rate limit / quota error: {exc}") from exc

        except Exception as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
