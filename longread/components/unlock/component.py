"""
Unlock component - Client-side progressive unlock.

Invariants:
- State is exactly one of idle | loading | ready | cooldown | done | error
- cursor never decreases and never exceeds the number of loaded blocks
- At most one fetch per page binding
- Cooldown indicator shows ceil(remaining / cooldown * segments) segments
"""

from __future__ import annotations

from ._impl import UnlockController, active_segments, build_timer_gradient, read_embedding
from .models import (
    DEFAULT_CONFIG,
    EmbeddingOutput,
    ReadEmbeddingInput,
    TimerIndicatorInput,
    TimerIndicatorOutput,
    UnlockConfig,
)
from .ports import LockedContentFetcherPort, PaywallViewPort, TimerPort


def bind_controller(
    page_html: str,
    fetcher: LockedContentFetcherPort,
    view: PaywallViewPort,
    timer: TimerPort,
    config: UnlockConfig = DEFAULT_CONFIG,
) -> UnlockController | None:
    """
    Bind a controller to the first paywall region of a rendered page.

    Returns None when the page has no paywall region.
    """
    embedding = read_embedding(page_html)
    if not embedding.found:
        return None
    return UnlockController(embedding.locked_src, fetcher, view, timer, config)


# --- Component Entry Points ---


def run_read_embedding(inp: ReadEmbeddingInput) -> EmbeddingOutput:
    """Read the locked-content address from page HTML."""
    return read_embedding(inp.page_html)


def run_timer_indicator(inp: TimerIndicatorInput) -> TimerIndicatorOutput:
    """
    Render the cooldown indicator for `remaining` seconds.

    Zero active segments hides the indicator.
    """
    active = active_segments(inp.remaining, inp.config)
    if active == 0:
        return TimerIndicatorOutput(active_segments=0, gradient="", hidden=True)
    return TimerIndicatorOutput(
        active_segments=active,
        gradient=build_timer_gradient(active, inp.config.timer_segments),
        hidden=False,
    )


def run(inp: ReadEmbeddingInput | TimerIndicatorInput) -> EmbeddingOutput | TimerIndicatorOutput:
    """
    Main entry point for the unlock component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ReadEmbeddingInput):
        return run_read_embedding(inp)
    elif isinstance(inp, TimerIndicatorInput):
        return run_timer_indicator(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
