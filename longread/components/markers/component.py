"""
Markers component - Expand article annotations into tagged markdown.

Invariants:
- At most one meta (breadcrumb) region is extracted
- Unterminated, nested or overlapping regions stay literal
- Output is plain markdown with raw-HTML wrapper tags
- Never raises on content
"""

from __future__ import annotations

from ._impl import extract_meta, normalize_markdown
from .models import ExtractMetaInput, MetaOutput, NormalizeInput, NormalizeOutput

# --- Component Entry Points ---


def run_normalize(inp: NormalizeInput) -> NormalizeOutput:
    """
    Expand annotations and place the rendered breadcrumb.

    Args:
        inp: Input containing the article markdown.

    Returns:
        NormalizeOutput with the expanded markdown.
    """
    if not inp.markdown:
        return NormalizeOutput(markdown="")

    markdown, meta, breadcrumb_html, expanded = normalize_markdown(inp.markdown)
    return NormalizeOutput(
        markdown=markdown,
        meta=meta,
        breadcrumb_html=breadcrumb_html,
        expanded=expanded,
    )


def run_extract_meta(inp: ExtractMetaInput) -> MetaOutput:
    """Split the breadcrumb annotation from the rest of the markdown."""
    meta, cleaned = extract_meta(inp.markdown or "")
    return MetaOutput(meta=meta, cleaned_markdown=cleaned)


def normalize(markdown: str) -> str:
    """normalize(markdown) -> expandedMarkdown."""
    return run_normalize(NormalizeInput(markdown=markdown)).markdown


def run(inp: NormalizeInput | ExtractMetaInput) -> NormalizeOutput | MetaOutput:
    """
    Main entry point for the markers component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, NormalizeInput):
        return run_normalize(inp)
    elif isinstance(inp, ExtractMetaInput):
        return run_extract_meta(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
