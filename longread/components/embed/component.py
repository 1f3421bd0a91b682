"""
Embed component - Paywall region markup.

Invariants:
- Open and teaser HTML are inlined verbatim, open first
- The root always carries the locked-content address attribute ("" if none)
- The hint is rendered only when a locked tail exists
"""

from __future__ import annotations

import html

from .models import BODY_ATTR, HINT_CLASS, ROOT_ATTR, SRC_ATTR, EmbedInput, EmbedOutput


def render_paywall_region(inp: EmbedInput) -> str:
    """Open content, teaser and the container the unlock controller binds to."""
    parts = ['<div class="article-open">', inp.open_html, "</div>"]
    if inp.teaser_html:
        parts += ['<div class="article-teaser">', inp.teaser_html, "</div>"]

    src = html.escape(inp.locked_src, quote=True)
    parts.append(f'<div class="paywall-text" {ROOT_ATTR} {SRC_ATTR}="{src}">')
    parts.append(f'<div class="paywall-text__body" {BODY_ATTR}>')
    if inp.locked_src and inp.hint_html:
        parts.append(f'<p class="{HINT_CLASS}">{inp.hint_html}</p>')
    parts.append("</div>")
    if inp.locked_src:
        label = html.escape(inp.action_label, quote=False)
        parts.append(
            '<div class="paywall-fab" data-paywall-fab>'
            f'<button type="button" data-paywall-add><span data-paywall-add-label>{label}</span></button>'
            '<span class="paywall-fab__timer" data-paywall-timer hidden></span>'
            "</div>"
        )
    parts.append("</div>")
    return "\n".join(parts)


# --- Component Entry Points ---


def run_embed(inp: EmbedInput) -> EmbedOutput:
    """
    Render the paywalled article body.

    Args:
        inp: Segment HTML, locked-content address and labels

    Returns:
        EmbedOutput with the page fragment
    """
    return EmbedOutput(html=render_paywall_region(inp), has_locked_tail=bool(inp.locked_src))


def run(inp: EmbedInput) -> EmbedOutput:
    """
    Main entry point for the embed component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, EmbedInput):
        return run_embed(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
