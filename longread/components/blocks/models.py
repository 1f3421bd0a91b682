"""
Blocks component models.

A Block is one countable unit of rendered article content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Literal

TokenKind = Literal[
    "heading",
    "paragraph",
    "list",
    "blockquote",
    "table",
    "code",
    "component",
    "html",
    "rule",
]

# mistune token type -> block kind
TOKEN_KINDS: dict[str, TokenKind] = {
    "heading": "heading",
    "paragraph": "paragraph",
    "list": "list",
    "block_quote": "blockquote",
    "table": "table",
    "block_code": "code",
    "block_html": "html",
    "thematic_break": "rule",
}

_HEADING_RE = re.compile(r"^\s*<h([1-6])[\s>]")


@dataclass(frozen=True)
class Block:
    """One countable content unit (index is 1-based)."""

    index: int
    token_kind: str
    html: str
    text: str

    @property
    def heading_level(self) -> int:
        """Heading level for heading blocks, 0 otherwise."""
        if self.token_kind != "heading":
            return 0
        match = _HEADING_RE.match(self.html)
        return int(match.group(1)) if match else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "tokenKind": self.token_kind,
            "html": self.html,
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block:
        return cls(
            index=int(data["index"]),
            token_kind=str(data["tokenKind"]),
            html=str(data["html"]),
            text=str(data["text"]),
        )


@dataclass(frozen=True)
class TokenGroup:
    """
    Top-level tokens that render together.

    Non-countable groups (blank lines, comments, breadcrumb) belong to the
    block they travel with: leading ones to the first block, others to the
    block before them. `owner` is 0 when the document has no blocks.
    """

    tokens: tuple[dict[str, Any], ...]
    kind: str
    countable: bool
    owner: int = 0


# --- Input Models ---


@dataclass(frozen=True)
class ClassifyInput:
    """Input for classifying already-normalized markdown."""

    markdown: str


@dataclass(frozen=True)
class ExtractBlocksInput:
    """Input for listing the blocks of raw (annotated) article markdown."""

    markdown: str
    strip_leading_heading: bool = False


# --- Output Models ---


@dataclass(frozen=True)
class ClassifyOutput:
    """Classified blocks."""

    blocks: tuple[Block, ...]
    total_blocks: int
    errors: list[str] = field(default_factory=list)
    success: bool = True
