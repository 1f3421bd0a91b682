"""
Unlock component models.

Client-side progressive unlock state. The controller state is one tagged
union; every member is a frozen dataclass carrying a `phase` literal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from longread.components.blocks import Block

Phase = Literal["idle", "loading", "ready", "cooldown", "done", "error"]
ErrorReason = Literal["no_source", "load_failed"]

DEFAULT_COOLDOWN_SECONDS = 15
DEFAULT_TIMER_SEGMENTS = 8
TIMER_GAP_DEGREES = 3


class LockedContentFetchError(Exception):
    """Locked content could not be fetched or did not validate."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# --- Configuration ---


@dataclass(frozen=True)
class UnlockMessages:
    """User-facing labels for each controller phase."""

    add_label: str = "Add paragraph"
    loading_label: str = "Loading..."
    finished_label: str = "Text finished"
    no_source_label: str = "No source configured"
    no_source_error: str = "No source configured"
    load_failed_error: str = "Failed to load full text"
    end_marker: str = "End of article reached"
    hint: str = "Press the button to reveal the next paragraph"


@dataclass(frozen=True)
class UnlockConfig:
    """Controller configuration from rules."""

    cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS
    timer_segments: int = DEFAULT_TIMER_SEGMENTS
    messages: UnlockMessages = field(default_factory=UnlockMessages)


DEFAULT_CONFIG = UnlockConfig()


# --- Controller States ---


@dataclass(frozen=True)
class Idle:
    """No fetch attempted yet."""

    phase: Literal["idle"] = "idle"


@dataclass(frozen=True)
class Loading:
    """The one fetch is in flight."""

    phase: Literal["loading"] = "loading"


@dataclass(frozen=True)
class Ready:
    """Blocks cached, cursor < len(blocks), unlock enabled."""

    blocks: tuple[Block, ...]
    cursor: int
    phase: Literal["ready"] = "ready"


@dataclass(frozen=True)
class Cooldown:
    """A block was just revealed; unlock disabled until remaining hits 0."""

    blocks: tuple[Block, ...]
    cursor: int
    remaining: int
    phase: Literal["cooldown"] = "cooldown"


@dataclass(frozen=True)
class Done:
    """Every block revealed (terminal)."""

    blocks: tuple[Block, ...]
    cursor: int
    phase: Literal["done"] = "done"


@dataclass(frozen=True)
class Failed:
    """Terminal until reload: no address configured, or the fetch failed."""

    reason: ErrorReason
    message: str
    phase: Literal["error"] = "error"


UnlockState = Idle | Loading | Ready | Cooldown | Done | Failed


@dataclass(frozen=True)
class ClientUnlockState:
    """Flat view of the controller state."""

    blocks_loaded: tuple[Block, ...] | None
    cursor: int
    cooldown_remaining: int
    phase: Phase

    @classmethod
    def of(cls, state: UnlockState) -> ClientUnlockState:
        if isinstance(state, Cooldown):
            return cls(state.blocks, state.cursor, state.remaining, state.phase)
        if isinstance(state, Ready | Done):
            return cls(state.blocks, state.cursor, 0, state.phase)
        return cls(None, 0, 0, state.phase)


# --- Input Models ---


@dataclass(frozen=True)
class ReadEmbeddingInput:
    """Input for reading the paywall embedding contract from page HTML."""

    page_html: str


@dataclass(frozen=True)
class TimerIndicatorInput:
    """Input for rendering the cooldown indicator."""

    remaining: float
    config: UnlockConfig = DEFAULT_CONFIG


# --- Output Models ---


@dataclass(frozen=True)
class EmbeddingOutput:
    """What the page exposes to the controller."""

    found: bool
    locked_src: str = ""
    has_hint: bool = False


@dataclass(frozen=True)
class TimerIndicatorOutput:
    """Active segment count and its CSS background ("" when hidden)."""

    active_segments: int
    gradient: str
    hidden: bool
