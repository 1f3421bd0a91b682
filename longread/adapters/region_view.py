"""
In-memory paywall region.

Mirrors what the page shows: revealed blocks, the one-time hint, a single
error line, the end marker and the action/timer state.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field

from longread.components.unlock import build_timer_gradient, read_embedding


@dataclass
class RegionView:
    """PaywallViewPort that records the region state."""

    has_hint: bool = True
    timer_segments_total: int = 8
    appended: list[str] = field(default_factory=list)
    error_message: str | None = None
    end_message: str | None = None
    end_count: int = 0
    action_enabled: bool = False
    action_label: str = ""
    timer_segments: int = 0
    timer_gradient: str = ""

    @classmethod
    def from_page(cls, page_html: str, timer_segments_total: int = 8) -> RegionView:
        return cls(
            has_hint=read_embedding(page_html).has_hint,
            timer_segments_total=timer_segments_total,
        )

    # --- PaywallViewPort ---

    def append_html(self, html: str) -> None:
        self.appended.append(html)

    def remove_hint(self) -> None:
        self.has_hint = False

    def show_error(self, message: str) -> None:
        self.error_message = message

    def show_end(self, message: str) -> None:
        if self.end_count == 0:
            self.end_message = message
        self.end_count += 1

    def set_action(self, enabled: bool, label: str) -> None:
        self.action_enabled = enabled
        self.action_label = label

    def set_timer(self, active_segments: int) -> None:
        self.timer_segments = active_segments
        self.timer_gradient = (
            build_timer_gradient(active_segments, self.timer_segments_total)
            if active_segments > 0
            else ""
        )

    # --- inspection ---

    @property
    def timer_hidden(self) -> bool:
        return self.timer_segments == 0

    def body_html(self, hint: str = "") -> str:
        """The locked body as it would currently render."""
        parts: list[str] = []
        if self.has_hint and hint:
            parts.append(f'<p class="paywall-text__hint">{html.escape(hint, quote=False)}</p>')
        parts.extend(self.appended)
        if self.error_message is not None:
            parts.append(
                f'<p class="paywall-text__error">{html.escape(self.error_message, quote=False)}</p>'
            )
        if self.end_message is not None:
            parts.append(
                f'<p class="paywall-text__end">{html.escape(self.end_message, quote=False)}</p>'
            )
        return "\n".join(parts)
