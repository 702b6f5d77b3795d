"""Domain exception hierarchy.

Precondition errors map to HTTP status codes at the interface layer.
Provider errors never leave the generation controller; it turns them into
user-facing state instead.
"""

from __future__ import annotations


class LyricsGeneratorError(Exception):
    """Base exception for the entire application."""


# ── Submission preconditions ────────────────────────────────────────────────


class EmptyPromptError(LyricsGeneratorError):
    """The prompt is empty or whitespace-only."""


class GenerationInProgressError(LyricsGeneratorError):
    """A generation request is already in flight."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(LyricsGeneratorError):
    """Any error originating from the LLM provider."""
