"""
Locked store component models.

The locked tail of an article is persisted as one JSON artifact per
(branch, slug) at a deterministic address.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from longread.components.blocks import Block

DEFAULT_PATH_TEMPLATE = "content/locked/{branch}/{slug}.json"


@dataclass(frozen=True)
class ArticleKey:
    """Identifies an article within a content branch."""

    branch: str
    slug: str

    @property
    def key(self) -> str:
        """Override lookup key "<branch>/<slug>"."""
        return f"{self.branch}/{self.slug}"

    @classmethod
    def parse(cls, key: str) -> ArticleKey:
        branch, sep, slug = key.partition("/")
        if not sep or not branch or not slug:
            raise ValueError(f"Invalid article key: {key!r}")
        return cls(branch=branch, slug=slug)


@dataclass(frozen=True)
class LockedStoreConfig:
    """Where artifacts live on disk and how they are addressed publicly."""

    path_template: str = DEFAULT_PATH_TEMPLATE
    public_prefix: str = "/"


# --- Wire Schema ---


class LockedBlockPayload(BaseModel):
    """One block as served to the client."""

    model_config = ConfigDict(populate_by_name=True)

    index: int
    token_kind: str = Field(alias="tokenKind")
    html: str
    text: str

    def to_block(self) -> Block:
        return Block(index=self.index, token_kind=self.token_kind, html=self.html, text=self.text)


class LockedContentPayload(BaseModel):
    """{ "blocks": [...] } - the locked content artifact."""

    blocks: list[LockedBlockPayload]

    def to_blocks(self) -> list[Block]:
        return [item.to_block() for item in self.blocks]


# --- Input Models ---


@dataclass(frozen=True)
class PersistInput:
    """Input for persisting an article's locked tail."""

    article_key: ArticleKey
    locked_blocks: tuple[Block, ...]


# --- Output Models ---


@dataclass(frozen=True)
class PersistOutput:
    """
    Persist result.

    An empty address means the article has no locked tail.
    """

    address: str
    path: str = ""
    block_count: int = 0
    errors: list[str] = field(default_factory=list)
    success: bool = True
