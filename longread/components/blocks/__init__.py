"""
Blocks component - Block classification of article markdown.
"""

from ._impl import (
    DEFAULT_PLUGINS,
    BlockRenderer,
    ClassifiedDocument,
    classify_document,
    strip_html,
)
from .component import (
    classify,
    extract_blocks,
    parse_document,
    run,
    run_classify,
    run_extract_blocks,
)
from .models import (
    TOKEN_KINDS,
    Block,
    ClassifyInput,
    ClassifyOutput,
    ExtractBlocksInput,
    TokenGroup,
    TokenKind,
)

__all__ = [
    # Entry points
    "classify",
    "extract_blocks",
    "parse_document",
    "run",
    "run_classify",
    "run_extract_blocks",
    # Input models
    "ClassifyInput",
    "ExtractBlocksInput",
    # Output models
    "Block",
    "ClassifyOutput",
    "TokenGroup",
    "TokenKind",
    "TOKEN_KINDS",
    # Rendering
    "DEFAULT_PLUGINS",
    "BlockRenderer",
    "ClassifiedDocument",
    "classify_document",
    "strip_html",
]
