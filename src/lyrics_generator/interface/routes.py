"""Routes — the lyrics page and its JSON counterpart.

Both surfaces delegate to the same :class:`GenerationController`; the page
routes re-render ``index.html`` from the controller's state snapshot.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from lyrics_generator.domain.exceptions import (
    EmptyPromptError,
    GenerationInProgressError,
)
from lyrics_generator.interface.dependencies import get_controller
from lyrics_generator.interface.schemas import (
    ErrorResponse,
    LyricsRequest,
    LyricsResponse,
    StateResponse,
)
from lyrics_generator.services.generate_lyrics import API_KEY_URL, GenerationController

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _render_page(
    request: Request,
    controller: GenerationController,
    status_code: int = 200,
) -> HTMLResponse:
    snapshot = controller.snapshot()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "state": snapshot,
            "can_submit": controller.can_submit(snapshot.prompt),
            "api_key_url": API_KEY_URL,
        },
        status_code=status_code,
    )


def _state_response(controller: GenerationController) -> StateResponse:
    snapshot = controller.snapshot()
    return StateResponse.from_snapshot(
        snapshot, can_submit=controller.can_submit(snapshot.prompt)
    )


# ── HTML page ───────────────────────────────────────────────────────────────


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    controller: GenerationController = Depends(get_controller),
) -> HTMLResponse:
    """Render the lyrics generator page."""
    return _render_page(request, controller)


@router.post("/generate", response_class=HTMLResponse)
async def generate_page(
    request: Request,
    prompt: str = Form(""),
    controller: GenerationController = Depends(get_controller),
) -> HTMLResponse:
    """Handle the form submission and re-render the page."""
    try:
        await controller.submit(prompt)
    except EmptyPromptError:
        return _render_page(request, controller, status_code=422)
    except GenerationInProgressError:
        return _render_page(request, controller, status_code=409)
    return _render_page(request, controller)


# ── JSON API ────────────────────────────────────────────────────────────────


@router.post(
    "/api/lyrics",
    response_model=LyricsResponse,
    responses={
        409: {
            "model": ErrorResponse,
            "description": "A generation request is already in flight",
        },
        422: {"model": ErrorResponse, "description": "Empty prompt"},
    },
)
async def generate_lyrics(
    body: LyricsRequest,
    controller: GenerationController = Depends(get_controller),
) -> LyricsResponse:
    """Generate lyrics for a prompt and return the outcome with the new state."""
    result = await controller.submit(body.prompt)
    return LyricsResponse(
        outcome=result.outcome,
        lyrics=result.text,
        state=_state_response(controller),
    )


@router.get("/api/state", response_model=StateResponse)
async def get_state(
    controller: GenerationController = Depends(get_controller),
) -> StateResponse:
    """Return the current generation state."""
    return _state_response(controller)
