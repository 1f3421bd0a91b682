"""
UnlockController - Progressive reveal of the locked tail.

States: idle -> loading -> ready <-> cooldown -> done, or error.

Key behaviors:
- Unlock is accepted only in idle or ready
- At most one fetch per controller; blocks are cached afterwards
- A repeated unlock while loading is a no-op
- Each reveal appends one block verbatim and starts the cooldown
- Cooldown counts down once per tick and returns to ready at zero
- The end marker is shown exactly once, on entering done
- No address: error("no_source") immediately, no network attempt
- Any fetch failure ends in error("load_failed"); cancellation propagates
"""

from __future__ import annotations

import logging
import math
import re
from typing import assert_never

from .models import (
    DEFAULT_CONFIG,
    DEFAULT_TIMER_SEGMENTS,
    TIMER_GAP_DEGREES,
    ClientUnlockState,
    Cooldown,
    Done,
    EmbeddingOutput,
    ErrorReason,
    Failed,
    Idle,
    Loading,
    Ready,
    UnlockConfig,
    UnlockState,
)
from .ports import LockedContentFetcherPort, PaywallViewPort, TimerHandle, TimerPort

logger = logging.getLogger(__name__)

TIMER_ON = "rgba(0,0,0,0.9)"
TIMER_OFF = "rgba(0,0,0,0)"

# --- Timer Indicator ---


def active_segments(remaining: float, config: UnlockConfig = DEFAULT_CONFIG) -> int:
    """Number of lit segments for `remaining` seconds of cooldown."""
    segments = config.timer_segments
    if config.cooldown_seconds <= 0:
        return 0
    lit = math.ceil(remaining / config.cooldown_seconds * segments)
    return max(0, min(segments, lit))


def build_timer_gradient(
    active: int,
    segments: int = DEFAULT_TIMER_SEGMENTS,
    gap: float = TIMER_GAP_DEGREES,
) -> str:
    """CSS conic-gradient with `active` lit segments and a gap after each."""
    angle = 360 / segments
    stops: list[str] = []
    for i in range(segments):
        start = i * angle
        end = start + angle - gap
        fill = TIMER_ON if i < active else TIMER_OFF
        stops.append(f"{fill} {start:g}deg {end:g}deg")
        stops.append(f"{TIMER_OFF} {end:g}deg {(i + 1) * angle:g}deg")
    return f"conic-gradient({','.join(stops)})"


# --- Embedding Contract ---

ROOT_TAG_PATTERN = re.compile(r"<(\w+)([^>]*\bdata-paywall-root\b[^>]*)>", re.IGNORECASE)
ATTR_PATTERN = re.compile(r'([\w-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s>]+))', re.IGNORECASE)
HINT_PATTERN = re.compile(r'class="[^"]*\bpaywall-text__hint\b', re.IGNORECASE)


def parse_attributes(attr_string: str) -> dict[str, str]:
    attrs = {}
    for match in ATTR_PATTERN.finditer(attr_string):
        name = match.group(1).lower()
        value = match.group(2) or match.group(3) or match.group(4) or ""
        attrs[name] = value
    return attrs


def read_embedding(page_html: str) -> EmbeddingOutput:
    """Find the first paywall root and read its locked-content address."""
    match = ROOT_TAG_PATTERN.search(page_html or "")
    if match is None:
        return EmbeddingOutput(found=False)
    attrs = parse_attributes(match.group(2))
    return EmbeddingOutput(
        found=True,
        locked_src=attrs.get("data-locked-src", "").strip(),
        has_hint=bool(HINT_PATTERN.search(page_html[match.end() :])),
    )


# --- Controller ---


class UnlockController:
    """Finite-state machine bound to one page's paywall region."""

    def __init__(
        self,
        address: str,
        fetcher: LockedContentFetcherPort,
        view: PaywallViewPort,
        timer: TimerPort,
        config: UnlockConfig = DEFAULT_CONFIG,
    ) -> None:
        self.address = address or ""
        self.fetcher = fetcher
        self.view = view
        self.timer = timer
        self.config = config
        self.fetch_count = 0
        self._handle: TimerHandle | None = None
        self._state: UnlockState = Idle()

        if not self.address:
            self._fail("no_source", self.config.messages.no_source_error)
        else:
            self._render()

    @property
    def state(self) -> UnlockState:
        return self._state

    @property
    def phase(self) -> str:
        return self._state.phase

    def snapshot(self) -> ClientUnlockState:
        return ClientUnlockState.of(self._state)

    async def unlock(self) -> UnlockState:
        """The unlock action. Ignored outside idle and ready."""
        state = self._state
        if isinstance(state, Idle):
            await self._load()
            if isinstance(self._state, Ready):
                self._reveal(self._state)
        elif isinstance(state, Ready):
            self._reveal(state)
        else:
            logger.debug("Unlock ignored in phase %s", state.phase)
        return self._state

    def tick(self) -> None:
        """One second of cooldown."""
        state = self._state
        if not isinstance(state, Cooldown):
            return
        remaining = max(0, state.remaining - 1)
        if remaining == 0:
            self._stop_timer()
            self._state = Ready(blocks=state.blocks, cursor=state.cursor)
        else:
            self._state = Cooldown(blocks=state.blocks, cursor=state.cursor, remaining=remaining)
        self._render()

    def close(self) -> None:
        """Discard the controller (page navigation)."""
        self._stop_timer()

    # --- transitions ---

    async def _load(self) -> None:
        self._state = Loading()
        self._render()
        self.fetch_count += 1
        try:
            blocks = await self.fetcher.fetch(self.address)
        except Exception:
            logger.exception("Failed to load locked content from %s", self.address)
            self._fail("load_failed", self.config.messages.load_failed_error)
            return

        if not blocks:
            logger.warning("Locked content at %s has no blocks", self.address)
            self._fail("load_failed", self.config.messages.load_failed_error)
            return

        self._state = Ready(blocks=tuple(blocks), cursor=0)

    def _reveal(self, state: Ready) -> None:
        block = state.blocks[state.cursor]
        self.view.append_html(block.html)
        if state.cursor == 0:
            self.view.remove_hint()

        cursor = state.cursor + 1
        if cursor >= len(state.blocks):
            self._state = Done(blocks=state.blocks, cursor=cursor)
            self.view.show_end(self.config.messages.end_marker)
        else:
            self._state = Cooldown(
                blocks=state.blocks, cursor=cursor, remaining=self.config.cooldown_seconds
            )
            self._stop_timer()
            self._handle = self.timer.start(1.0, self.tick)
        self._render()

    def _fail(self, reason: ErrorReason, message: str) -> None:
        self._state = Failed(reason=reason, message=message)
        self.view.show_error(message)
        self._render()

    def _stop_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    # --- view ---

    def _render(self) -> None:
        messages = self.config.messages
        state = self._state
        remaining = 0

        if isinstance(state, Idle | Ready):
            enabled, label = True, messages.add_label
        elif isinstance(state, Loading):
            enabled, label = False, messages.loading_label
        elif isinstance(state, Cooldown):
            enabled, label = False, messages.add_label
            remaining = state.remaining
        elif isinstance(state, Done):
            enabled, label = False, messages.finished_label
        elif isinstance(state, Failed):
            enabled = False
            label = messages.no_source_label if state.reason == "no_source" else messages.add_label
        else:
            assert_never(state)

        self.view.set_action(enabled, label)
        self.view.set_timer(active_segments(remaining, self.config))
