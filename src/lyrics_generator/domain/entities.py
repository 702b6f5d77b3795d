"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RequestState(str, Enum):
    """Whether a generation request is currently outstanding."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"


class GenerationOutcome(str, Enum):
    """How a single submission settled."""

    SUCCESS = "success"
    EMPTY_RESULT = "empty_result"
    BLOCKED = "blocked"
    TRANSPORT_ERROR = "transport_error"


@dataclass(slots=True)
class GenerationState:
    """Mutable UI state owned by the generation controller."""

    prompt: str = ""
    result: str | None = None
    request_state: RequestState = RequestState.IDLE
    error: str | None = None

    @property
    def in_flight(self) -> bool:
        return self.request_state is RequestState.IN_FLIGHT


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Read-only copy of :class:`GenerationState` handed to renderers."""

    prompt: str
    result: str | None
    request_state: RequestState
    error: str | None
    credential_configured: bool

    @property
    def in_flight(self) -> bool:
        return self.request_state is RequestState.IN_FLIGHT


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Tagged result of one submission; ``text`` is set only on success."""

    outcome: GenerationOutcome
    text: str | None = None
