"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel

from lyrics_generator.domain.entities import (
    GenerationOutcome,
    RequestState,
    StateSnapshot,
)


class LyricsRequest(BaseModel):
    """Request body for ``POST /api/lyrics``."""

    prompt: str


class StateResponse(BaseModel):
    """Current generation state, as shown on the page."""

    prompt: str
    lyrics: str | None
    error: str | None
    request_state: RequestState
    credential_configured: bool
    can_submit: bool

    @classmethod
    def from_snapshot(cls, snapshot: StateSnapshot, *, can_submit: bool) -> StateResponse:
        return cls(
            prompt=snapshot.prompt,
            lyrics=snapshot.result,
            error=snapshot.error,
            request_state=snapshot.request_state,
            credential_configured=snapshot.credential_configured,
            can_submit=can_submit,
        )


class LyricsResponse(BaseModel):
    """Response from ``POST /api/lyrics``."""

    outcome: GenerationOutcome
    lyrics: str | None = None
    state: StateResponse


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
