"""
Segmentation component - Open/teaser/locked partition of an article.

Invariants:
- 0 <= open_block_count <= total_block_count
- The teaser window, when non-empty, immediately follows the open window
- locked_count = total - open - teaser >= 0
- Default heuristic with total >= 2 leaves at least one block locked
- open_html/teaser_html are rendered from token sub-ranges of the one parse,
  never by re-parsing a substring of the markdown
- Never raises on content; counts are clamped
"""

from __future__ import annotations

from collections.abc import Sequence

from longread.components.blocks import Block, ClassifiedDocument, classify_document
from longread.components.markers import normalize, strip_leading_heading

from ._impl import SegmentationStrategy, select_strategy
from .models import (
    DEFAULT_CONFIG,
    PaywallOverride,
    SegmentationConfig,
    SegmentationResult,
    SegmentBlocksInput,
    SegmentInput,
    SegmentOutput,
)


def segment(
    source: ClassifiedDocument | Sequence[Block],
    override: PaywallOverride | None = None,
    strategy: SegmentationStrategy | str | None = None,
    config: SegmentationConfig = DEFAULT_CONFIG,
) -> SegmentationResult:
    """
    segment(blocks, override?) -> SegmentationResult.

    Given a ClassifiedDocument, the windows are re-rendered from its tokens
    so non-countable markup (breadcrumb, comments) travels with them. Given
    a bare block list, the windows are the concatenated block HTML.
    """
    if strategy is None or isinstance(strategy, str):
        strategy = select_strategy(strategy, config)

    if isinstance(source, ClassifiedDocument):
        blocks: tuple[Block, ...] = source.blocks
    else:
        blocks = tuple(source)

    bounds = strategy.boundary(blocks, override)
    open_count = bounds.open_count
    teaser_end = open_count + bounds.teaser_count

    if isinstance(source, ClassifiedDocument):
        open_html = source.render_range(1, open_count)
        teaser_html = source.render_range(open_count + 1, teaser_end)
    else:
        open_html = "".join(block.html for block in blocks[:open_count])
        teaser_html = "".join(block.html for block in blocks[open_count:teaser_end])

    return SegmentationResult(
        open_html=open_html,
        teaser_html=teaser_html,
        open_block_count=open_count,
        teaser_block_count=bounds.teaser_count,
        total_block_count=len(blocks),
        locked_blocks=blocks[teaser_end:],
        strategy=strategy.name,
    )


def segment_markdown(
    markdown: str,
    override: PaywallOverride | None = None,
    strategy: SegmentationStrategy | str | None = None,
    config: SegmentationConfig = DEFAULT_CONFIG,
    strip_heading: bool = False,
) -> SegmentationResult:
    """Normalize, classify and segment raw article markdown."""
    markdown = markdown or ""
    if strip_heading:
        markdown = strip_leading_heading(markdown)
    document = classify_document(normalize(markdown))
    return segment(document, override, strategy, config)


# --- Component Entry Points ---


def run_segment(inp: SegmentInput) -> SegmentOutput:
    """
    Segment raw article markdown.

    Args:
        inp: Input containing markdown, optional override and strategy name.

    Returns:
        SegmentOutput with the segmentation result.
    """
    result = segment_markdown(
        inp.markdown,
        override=inp.override,
        strategy=inp.strategy,
        config=inp.config,
        strip_heading=inp.strip_leading_heading,
    )
    return SegmentOutput(result=result)


def run_segment_blocks(inp: SegmentBlocksInput) -> SegmentOutput:
    """Segment an already classified block list."""
    result = segment(inp.blocks, override=inp.override, strategy=inp.strategy, config=inp.config)
    return SegmentOutput(result=result)


def run(inp: SegmentInput | SegmentBlocksInput) -> SegmentOutput:
    """
    Main entry point for the segmentation component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, SegmentInput):
        return run_segment(inp)
    elif isinstance(inp, SegmentBlocksInput):
        return run_segment_blocks(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
