"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

from lyrics_generator.infrastructure.config import get_settings
from lyrics_generator.infrastructure.openai_adapter import OpenAIAdapter
from lyrics_generator.services.generate_lyrics import GenerationController

logger = logging.getLogger(__name__)

_openai_adapter: OpenAIAdapter | None = None
_controller: GenerationController | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _openai_adapter, _controller  # noqa: PLW0603

    settings = get_settings()
    if settings.credential_configured:
        assert settings.openai_api_key is not None
        _openai_adapter = OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
        )
        logger.info("OpenAI client ready (model=%s)", settings.openai_model)
    else:
        logger.warning(
            "OPENAI_API_KEY is missing or a placeholder; generation is disabled"
        )

    _controller = GenerationController(
        _openai_adapter,
        clear_stale_result=settings.clear_stale_result,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _openai_adapter, _controller  # noqa: PLW0603

    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None
    _controller = None


def get_controller() -> GenerationController:
    """Return the process-wide generation controller."""
    assert _controller is not None, "startup() was not called"
    return _controller
