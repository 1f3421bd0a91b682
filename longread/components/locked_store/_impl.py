"""
LockedContentStore - Persistence of locked article tails.

Key behaviors:
- Empty tail: nothing is written and the address is ""
- Non-empty tail: the artifact is rewritten wholesale at a path derived
  only from (branch, slug)
- Serialization is deterministic (key order fixed, UTF-8, no ASCII escaping)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from urllib.parse import quote

from longread.components.blocks import Block

from .models import ArticleKey, LockedContentPayload, LockedStoreConfig
from .ports import FileStorePort

logger = logging.getLogger(__name__)


def serialize_artifact(blocks: Sequence[Block]) -> bytes:
    """Encode { "blocks": [...] } as UTF-8 JSON."""
    payload = {"blocks": [block.to_dict() for block in blocks]}
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def parse_artifact(data: bytes | str) -> list[Block]:
    """
    Decode and validate an artifact body.

    Raises pydantic.ValidationError or ValueError on malformed input.
    """
    return LockedContentPayload.model_validate_json(data).to_blocks()


class LockedContentStore:
    """Writes locked tails through a FileStorePort."""

    def __init__(self, store: FileStorePort, config: LockedStoreConfig | None = None) -> None:
        self.store = store
        self.config = config or LockedStoreConfig()

    def artifact_path(self, article_key: ArticleKey) -> str:
        return self.config.path_template.format(
            branch=article_key.branch, slug=article_key.slug
        )

    def address_for(self, article_key: ArticleKey) -> str:
        prefix = self.config.public_prefix or "/"
        if not prefix.endswith("/"):
            prefix += "/"
        return prefix + quote(self.artifact_path(article_key))

    def persist(self, article_key: ArticleKey, locked_blocks: Sequence[Block]) -> str:
        """persist(articleKey, lockedBlocks) -> address | ''."""
        if not locked_blocks:
            logger.info("No locked tail for %s", article_key.key)
            return ""

        stored = self.store.save(self.artifact_path(article_key), serialize_artifact(locked_blocks))
        logger.debug("Wrote %d locked blocks for %s to %s", len(locked_blocks), article_key.key, stored)
        return self.address_for(article_key)

