"""
Segmentation component models.

Partition of an article's blocks into open, teaser and locked windows.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal

from longread.components.blocks import Block

StrategyName = Literal["primary", "editorial", "divider"]

DEFAULT_OPEN_RATIO = 0.2
DEFAULT_TEASER_BLOCKS = 4


def clamp_count(value: Any, lo: int, hi: int) -> int:
    """
    Clamp a count into [lo, hi].

    Missing, non-numeric and NaN values degrade to `lo`; infinities go to
    the matching end. Fractions are floored.
    """
    if hi < lo:
        return hi
    if value is None or isinstance(value, str):
        return lo
    try:
        number = float(value)
    except (TypeError, ValueError):
        return lo
    if math.isnan(number) or number <= lo:
        return lo
    if number >= hi:
        return hi
    return int(math.floor(number))


@dataclass(frozen=True)
class PaywallOverride:
    """
    Per-article override keyed by "<branch>/<slug>".

    `teaser_blocks` of None means "use the configured default".
    """

    open_blocks: float | int | None
    teaser_blocks: float | int | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> PaywallOverride:
        return cls(
            open_blocks=data.get("openBlocks"),
            teaser_blocks=data.get("teaserBlocks"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"openBlocks": self.open_blocks}
        if self.teaser_blocks is not None:
            data["teaserBlocks"] = self.teaser_blocks
        return data


@dataclass(frozen=True)
class SegmentationConfig:
    """Segmentation tunables, normally built from rules.yaml."""

    open_ratio: float = DEFAULT_OPEN_RATIO
    default_teaser_blocks: int = DEFAULT_TEASER_BLOCKS
    intro_labels: tuple[str, ...] = ("introduction", "intro", "введение")
    max_intro_paragraphs: int = 3
    teaser_paragraphs: int = 3


DEFAULT_CONFIG = SegmentationConfig()


@dataclass(frozen=True)
class Boundary:
    """Window sizes chosen by a strategy, already clamped."""

    open_count: int
    teaser_count: int = 0


@dataclass(frozen=True)
class SegmentationResult:
    """Open/teaser HTML plus the locked tail."""

    open_html: str
    teaser_html: str
    open_block_count: int
    teaser_block_count: int
    total_block_count: int
    locked_blocks: tuple[Block, ...] = ()
    strategy: str = "primary"

    @property
    def locked_count(self) -> int:
        return self.total_block_count - self.open_block_count - self.teaser_block_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "openHtml": self.open_html,
            "teaserHtml": self.teaser_html,
            "openBlockCount": self.open_block_count,
            "teaserBlockCount": self.teaser_block_count,
            "totalBlockCount": self.total_block_count,
            "lockedCount": self.locked_count,
            "strategy": self.strategy,
        }


# --- Input Models ---


@dataclass(frozen=True)
class SegmentInput:
    """Input for segmenting raw article markdown."""

    markdown: str
    override: PaywallOverride | None = None
    strategy: StrategyName = "primary"
    strip_leading_heading: bool = False
    config: SegmentationConfig = DEFAULT_CONFIG


@dataclass(frozen=True)
class SegmentBlocksInput:
    """Input for segmenting an already classified block list."""

    blocks: tuple[Block, ...]
    override: PaywallOverride | None = None
    strategy: StrategyName = "primary"
    config: SegmentationConfig = DEFAULT_CONFIG


# --- Output Models ---


@dataclass(frozen=True)
class SegmentOutput:
    """Segmentation output."""

    result: SegmentationResult
    errors: list[str] = field(default_factory=list)
    success: bool = True
