"""
Boundary strategies for the segmentation engine.

Each strategy maps (blocks, override) to a Boundary. Strategies never raise
and never see HTML rendering; the component turns a Boundary into a
SegmentationResult.

Strategies:
- PrimaryStrategy: ~20% open with no teaser, or an explicit override
- EditorialBoundaryStrategy: heading/paragraph structure (legacy)
- DividerStrategy: open window ends at the first article divider
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol

from longread.components.blocks import Block

from .models import (
    DEFAULT_CONFIG,
    Boundary,
    PaywallOverride,
    SegmentationConfig,
    clamp_count,
)

DIVIDER_CLASS = "article-divider"


class SegmentationStrategy(Protocol):
    """Chooses the open/teaser window sizes for a block list."""

    name: str

    def boundary(self, blocks: Sequence[Block], override: PaywallOverride | None) -> Boundary: ...


class PrimaryStrategy:
    """Ratio default, or the per-article override when one is supplied."""

    name = "primary"

    def __init__(self, config: SegmentationConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def default_open(self, total: int) -> int:
        if total <= 0:
            return 0
        target = math.floor(total * self.config.open_ratio)
        return max(1, min(target, (total - 1) or total))

    def boundary(self, blocks: Sequence[Block], override: PaywallOverride | None) -> Boundary:
        total = len(blocks)
        if total == 0:
            return Boundary(0, 0)
        if override is None:
            return Boundary(self.default_open(total), 0)

        open_count = clamp_count(override.open_blocks, 1, total)
        teaser = override.teaser_blocks
        if teaser is None:
            teaser = self.config.default_teaser_blocks
        return Boundary(open_count, clamp_count(teaser, 0, total - open_count))


def _is_paragraph(block: Block) -> bool:
    return block.token_kind == "paragraph"


def _is_heading(block: Block) -> bool:
    return block.token_kind == "heading"


class EditorialBoundaryStrategy:
    """
    Open window follows the article's editorial structure.

    In order of preference the open window ends after:
    1. an introduction-labelled subsection (capped paragraphs),
    2. the first subsection (capped paragraphs, stops at the next heading),
    3. the first N paragraphs by raw count.
    A leading heading always stays with its content. Up to N further
    paragraphs then form the teaser. An override takes precedence.
    """

    name = "editorial"

    def __init__(self, config: SegmentationConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._primary = PrimaryStrategy(config)
        self._labels = tuple(label.casefold() for label in config.intro_labels)

    def _is_intro(self, block: Block) -> bool:
        text = block.text.casefold()
        return any(label in text for label in self._labels)

    def _subsection_end(self, blocks: Sequence[Block], heading_pos: int) -> int:
        """Position (0-based) of the last block kept after a subheading."""
        end = heading_pos
        paragraphs = 0
        for pos in range(heading_pos + 1, len(blocks)):
            block = blocks[pos]
            if _is_heading(block) or paragraphs >= self.config.max_intro_paragraphs:
                break
            end = pos
            if _is_paragraph(block):
                paragraphs += 1
        return end

    def _open_end(self, blocks: Sequence[Block]) -> int:
        start = 1 if _is_heading(blocks[0]) else 0
        subheadings = [pos for pos in range(start, len(blocks)) if _is_heading(blocks[pos])]

        for pos in subheadings:
            if self._is_intro(blocks[pos]):
                return self._subsection_end(blocks, pos)

        if subheadings:
            return self._subsection_end(blocks, subheadings[0])

        end = start - 1
        paragraphs = 0
        for pos in range(start, len(blocks)):
            if paragraphs >= self.config.max_intro_paragraphs:
                break
            end = pos
            if _is_paragraph(blocks[pos]):
                paragraphs += 1
        return max(end, 0)

    def _teaser_count(self, blocks: Sequence[Block], open_count: int) -> int:
        last = open_count
        paragraphs = 0
        for pos in range(open_count, len(blocks)):
            if paragraphs >= self.config.teaser_paragraphs:
                break
            if _is_paragraph(blocks[pos]):
                paragraphs += 1
                last = pos + 1
        return last - open_count

    def boundary(self, blocks: Sequence[Block], override: PaywallOverride | None) -> Boundary:
        total = len(blocks)
        if total == 0:
            return Boundary(0, 0)
        if override is not None:
            return self._primary.boundary(blocks, override)

        open_count = clamp_count(self._open_end(blocks) + 1, 1, total)
        teaser_count = clamp_count(self._teaser_count(blocks, open_count), 0, total - open_count)
        return Boundary(open_count, teaser_count)


class DividerStrategy:
    """
    Open window runs through the first divider component.

    The configured number of teaser blocks follows it. Without a divider the
    primary default applies; an override takes precedence.
    """

    name = "divider"

    def __init__(self, config: SegmentationConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._primary = PrimaryStrategy(config)

    @staticmethod
    def find_divider(blocks: Sequence[Block]) -> int:
        """1-based index of the first divider block, 0 if there is none."""
        for block in blocks:
            if block.token_kind == "component" and f'class="{DIVIDER_CLASS}"' in block.html:
                return block.index
        return 0

    def boundary(self, blocks: Sequence[Block], override: PaywallOverride | None) -> Boundary:
        total = len(blocks)
        if total == 0:
            return Boundary(0, 0)
        if override is not None:
            return self._primary.boundary(blocks, override)

        divider = self.find_divider(blocks)
        if not divider:
            return self._primary.boundary(blocks, None)

        open_count = clamp_count(divider, 1, total)
        teaser = clamp_count(self.config.default_teaser_blocks, 0, total - open_count)
        return Boundary(open_count, teaser)


STRATEGIES: dict[str, type[PrimaryStrategy | EditorialBoundaryStrategy | DividerStrategy]] = {
    "primary": PrimaryStrategy,
    "editorial": EditorialBoundaryStrategy,
    "divider": DividerStrategy,
}


def select_strategy(
    name: str | None,
    config: SegmentationConfig = DEFAULT_CONFIG,
) -> SegmentationStrategy:
    """Build a strategy by name; None selects the primary strategy."""
    try:
        strategy_cls = STRATEGIES[name or "primary"]
    except KeyError:
        raise ValueError(f"Unknown segmentation strategy: {name}") from None
    return strategy_cls(config)
