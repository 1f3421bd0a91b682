"""
Segmentation component - Paywall boundary selection.
"""

from ._impl import (
    STRATEGIES,
    DividerStrategy,
    EditorialBoundaryStrategy,
    PrimaryStrategy,
    SegmentationStrategy,
    select_strategy,
)
from .component import (
    run,
    run_segment,
    run_segment_blocks,
    segment,
    segment_markdown,
)
from .models import (
    DEFAULT_CONFIG,
    DEFAULT_OPEN_RATIO,
    DEFAULT_TEASER_BLOCKS,
    Boundary,
    PaywallOverride,
    SegmentationConfig,
    SegmentationResult,
    SegmentBlocksInput,
    SegmentInput,
    SegmentOutput,
    StrategyName,
    clamp_count,
)

__all__ = [
    # Entry points
    "run",
    "run_segment",
    "run_segment_blocks",
    "segment",
    "segment_markdown",
    # Input models
    "PaywallOverride",
    "SegmentBlocksInput",
    "SegmentInput",
    # Output models
    "Boundary",
    "SegmentationResult",
    "SegmentOutput",
    # Strategies
    "STRATEGIES",
    "DividerStrategy",
    "EditorialBoundaryStrategy",
    "PrimaryStrategy",
    "SegmentationStrategy",
    "StrategyName",
    "select_strategy",
    # Configuration
    "DEFAULT_CONFIG",
    "DEFAULT_OPEN_RATIO",
    "DEFAULT_TEASER_BLOCKS",
    "SegmentationConfig",
    "clamp_count",
]
