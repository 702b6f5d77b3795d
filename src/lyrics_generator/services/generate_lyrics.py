"""Generate-lyrics use case — the generation controller.

The controller owns the whole UI state block (:class:`GenerationState`) and
is the only thing that mutates it. Each :meth:`GenerationController.submit`
call makes at most one request to the LLM gateway and settles into exactly
one :class:`GenerationOutcome`. Provider failures are absorbed here; only the
precondition errors that correspond to a disabled submit button escape.
"""

from __future__ import annotations

import logging

from lyrics_generator.domain.entities import (
    GenerationOutcome,
    GenerationResult,
    GenerationState,
    RequestState,
    StateSnapshot,
)
from lyrics_generator.domain.exceptions import (
    EmptyPromptError,
    GenerationInProgressError,
)
from lyrics_generator.domain.ports.llm_gateway import LlmGateway
from lyrics_generator.services.prompt_template import build_messages

logger = logging.getLogger(__name__)

# ── User-facing messages ────────────────────────────────────────────────────

API_KEY_URL = "https://platform.openai.com/account/api-keys"

MISSING_CREDENTIAL_MESSAGE = (
    "Please add your actual OpenAI API key to the .env file. "
    f"You can get your API key from {API_KEY_URL}"
)
EMPTY_RESULT_MESSAGE = "Failed to generate lyrics. Please try again."
TRANSPORT_ERROR_MESSAGE = (
    "Error connecting to OpenAI. Please check your API key and try again."
)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 500


class GenerationController:
    """Drives the prompt → lyrics round trip and keeps the UI state.

    Parameters
    ----------
    llm_gateway:
        Adapter used for the completion call, or ``None`` when no usable
        credential was configured at startup. With no gateway every
        submission is blocked.
    temperature:
        Sampling temperature sent with every request.
    max_tokens:
        Upper bound on the generated length.
    clear_stale_result:
        When true, the empty-result and transport-error paths also drop the
        previous result so that result and error are never shown together.
    """

    def __init__(
        self,
        llm_gateway: LlmGateway | None,
        *,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        clear_stale_result: bool = False,
    ) -> None:
        self._llm = llm_gateway
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._clear_stale_result = clear_stale_result
        self._state = GenerationState()

    # ── Queries ─────────────────────────────────────────────────────────

    @property
    def credential_configured(self) -> bool:
        return self._llm is not None

    @property
    def request_state(self) -> RequestState:
        return self._state.request_state

    def can_submit(self, prompt: str) -> bool:
        """Whether the submit trigger should be enabled for *prompt*."""
        return (
            self.credential_configured
            and bool(prompt.strip())
            and not self._state.in_flight
        )

    def snapshot(self) -> StateSnapshot:
        """Return a read-only copy of the current state."""
        s = self._state
        return StateSnapshot(
            prompt=s.prompt,
            result=s.result,
            request_state=s.request_state,
            error=s.error,
            credential_configured=self.credential_configured,
        )

    # ── Public entry point ──────────────────────────────────────────────

    async def submit(self, prompt: str) -> GenerationResult:
        """Run one generation attempt for *prompt*.

        Raises :class:`EmptyPromptError` or :class:`GenerationInProgressError`
        without touching state when the trigger would have been disabled.
        Every other path is reported through the returned result and the
        state block.
        """
        if self._llm is None:
            logger.warning("Generation blocked: OpenAI API key is not configured")
            self._state.prompt = prompt
            self._state.error = MISSING_CREDENTIAL_MESSAGE
            return GenerationResult(GenerationOutcome.BLOCKED)

        if not prompt.strip():
            raise EmptyPromptError("Prompt must not be empty.")

        # Check-and-set with no await in between: atomic on the event loop.
        if self._state.in_flight:
            raise GenerationInProgressError(
                "A generation request is already in progress."
            )
        self._state.request_state = RequestState.IN_FLIGHT
        self._state.prompt = prompt
        self._state.error = None

        try:
            return await self._generate(self._llm, prompt)
        finally:
            self._state.request_state = RequestState.IDLE

    # ── LLM interaction ─────────────────────────────────────────────────

    async def _generate(self, llm: LlmGateway, prompt: str) -> GenerationResult:
        logger.info("Generating lyrics (%d-char prompt)", len(prompt))

        try:
            text = await llm.complete(
                build_messages(prompt),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except Exception:
            # LlmError from the adapter, or anything a custom gateway raises.
            logger.exception("OpenAI error")
            self._fail(TRANSPORT_ERROR_MESSAGE)
            return GenerationResult(GenerationOutcome.TRANSPORT_ERROR)

        if not text:
            logger.warning("LLM returned no usable text")
            self._fail(EMPTY_RESULT_MESSAGE)
            return GenerationResult(GenerationOutcome.EMPTY_RESULT)

        self._state.result = text
        logger.info("Generated %d chars of lyrics", len(text))
        return GenerationResult(GenerationOutcome.SUCCESS, text=text)

    def _fail(self, message: str) -> None:
        self._state.error = message
        if self._clear_stale_result:
            self._state.result = None
