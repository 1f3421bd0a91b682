"""
Embed component models.

Page embedding contract for the paywall region.
"""

from __future__ import annotations

from dataclasses import dataclass

ROOT_ATTR = "data-paywall-root"
SRC_ATTR = "data-locked-src"
BODY_ATTR = "data-locked-body"
HINT_CLASS = "paywall-text__hint"


@dataclass(frozen=True)
class EmbedInput:
    """Everything the page needs to host the paywall region."""

    open_html: str
    teaser_html: str = ""
    locked_src: str = ""
    hint_html: str = ""
    action_label: str = "Add paragraph"


@dataclass(frozen=True)
class EmbedOutput:
    """Rendered article body with the paywall region."""

    html: str
    has_locked_tail: bool
