"""
Block classification over the mistune block token stream.

The whole document is parsed once. Every countable token is rendered on its
own through the same HTML renderer and the same parse state, so reference
links resolve exactly as in a full-document render and the concatenation of
all rendered groups equals the full render.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

import mistune
from mistune.core import BlockState

from longread.components.markers import BREADCRUMB_CLASS, component_classes

from .models import TOKEN_KINDS, Block, TokenGroup

DEFAULT_PLUGINS: tuple[str, ...] = ("table", "strikethrough")

_COMMENT_RE = re.compile(r"^\s*<!--[\s\S]*-->\s*$")
_BREADCRUMB_RE = re.compile(rf'^\s*<nav[^>]*class="[^"]*\b{BREADCRUMB_CLASS}\b')
_OPEN_TAG_RE = re.compile(r'^\s*<([a-z][a-z0-9]*)\s+class="([^"]*)"', re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def strip_html(html: str) -> str:
    """Plain-text projection: tags removed, whitespace collapsed."""
    return _SPACE_RE.sub(" ", _TAG_RE.sub(" ", html or "")).strip()


def _tag_depth(raw: str, tag: str) -> int:
    opened = len(re.findall(rf"<{tag}(?=[\s>/])", raw, re.IGNORECASE))
    closed = len(re.findall(rf"</{tag}\s*>", raw, re.IGNORECASE))
    return opened - closed


class BlockRenderer:
    """Parses markdown to block tokens and renders token runs to HTML."""

    def __init__(self, plugins: tuple[str, ...] = DEFAULT_PLUGINS) -> None:
        self._parser = mistune.create_markdown(renderer="ast", plugins=list(plugins))
        self._html = mistune.create_markdown(escape=False, plugins=list(plugins))

    def parse(self, markdown: str) -> tuple[list[dict[str, Any]], BlockState]:
        tokens, state = self._parser.parse(markdown)
        return list(tokens), state  # type: ignore[arg-type]

    def render(self, tokens: list[dict[str, Any]], state: BlockState) -> str:
        assert self._html.renderer is not None
        return self._html.renderer(tokens, state)

    def render_document(self, markdown: str) -> str:
        """Full-document render, used as the reference output."""
        return self._html(markdown)  # type: ignore[return-value]


@dataclass(frozen=True)
class ClassifiedDocument:
    """Parsed article: token groups, countable blocks and the parse state."""

    groups: tuple[TokenGroup, ...]
    blocks: tuple[Block, ...]
    state: BlockState = field(repr=False)
    renderer: BlockRenderer = field(repr=False)

    @property
    def total_blocks(self) -> int:
        return len(self.blocks)

    def render_range(self, first: int, last: int) -> str:
        """
        Render blocks `first..last` (inclusive, 1-based) with the tokens
        that travel with them. Empty when the range is empty.
        """
        if first > last:
            return ""
        tokens: list[dict[str, Any]] = []
        for group in self.groups:
            if first <= group.owner <= last:
                tokens.extend(group.tokens)
        return self.renderer.render(tokens, self.state)

    def render_all(self) -> str:
        tokens = [tok for group in self.groups for tok in group.tokens]
        return self.renderer.render(tokens, self.state)


def _group_tokens(tokens: list[dict[str, Any]]) -> list[tuple[list[dict[str, Any]], str, bool]]:
    classes = component_classes()
    groups: list[tuple[list[dict[str, Any]], str, bool]] = []
    i = 0

    while i < len(tokens):
        tok = tokens[i]
        tok_type = tok.get("type", "")

        if tok_type == "blank_line":
            groups.append(([tok], "blank", False))
            i += 1
            continue

        if tok_type != "block_html":
            groups.append(([tok], TOKEN_KINDS.get(tok_type, tok_type), True))
            i += 1
            continue

        raw = tok.get("raw", "")
        if _COMMENT_RE.match(raw):
            groups.append(([tok], "comment", False))
            i += 1
            continue
        if _BREADCRUMB_RE.match(raw):
            groups.append(([tok], "breadcrumb", False))
            i += 1
            continue

        opening = _OPEN_TAG_RE.match(raw)
        if opening and opening.group(2) in classes:
            tag = opening.group(1).lower()
            depth = _tag_depth(raw, tag)
            members = [tok]
            j = i + 1
            while depth > 0 and j < len(tokens):
                member = tokens[j]
                members.append(member)
                if member.get("type") == "block_html":
                    depth += _tag_depth(member.get("raw", ""), tag)
                j += 1
            if depth <= 0:
                groups.append((members, "component", True))
                i = j
                continue

        groups.append(([tok], "html", True))
        i += 1

    return groups


def classify_document(markdown: str, renderer: BlockRenderer | None = None) -> ClassifiedDocument:
    """Parse normalized markdown into countable, indexed blocks."""
    renderer = renderer or BlockRenderer()
    tokens, state = renderer.parse(markdown or "")

    raw_groups = _group_tokens(tokens)
    total = sum(1 for _, _, countable in raw_groups if countable)

    groups: list[TokenGroup] = []
    blocks: list[Block] = []
    index = 0

    for members, kind, countable in raw_groups:
        if countable:
            index += 1
            html = renderer.render(members, state)
            blocks.append(
                Block(index=index, token_kind=kind, html=html, text=strip_html(html))
            )
            owner = index
        else:
            # leading markers ride with the first block
            owner = index if index else (1 if total else 0)
        groups.append(
            TokenGroup(tokens=tuple(members), kind=kind, countable=countable, owner=owner)
        )

    return ClassifiedDocument(
        groups=tuple(groups),
        blocks=tuple(blocks),
        state=state,
        renderer=renderer,
    )
