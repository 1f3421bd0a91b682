"""
Locked store component - Locked tail persistence.

Invariants:
- Empty tail writes nothing and yields an empty address
- Address depends only on branch and slug
- Artifacts are overwritten wholesale on every build
"""

from __future__ import annotations

from collections.abc import Sequence

from longread.components.blocks import Block

from ._impl import LockedContentStore
from .models import ArticleKey, LockedStoreConfig, PersistInput, PersistOutput
from .ports import FileStorePort


def persist(
    article_key: ArticleKey,
    locked_blocks: Sequence[Block],
    store: FileStorePort,
    config: LockedStoreConfig | None = None,
) -> str:
    """persist(articleKey, lockedBlocks) -> address | ''."""
    return LockedContentStore(store, config).persist(article_key, locked_blocks)


# --- Component Entry Points ---


def run_persist(
    inp: PersistInput,
    store: FileStorePort,
    config: LockedStoreConfig | None = None,
) -> PersistOutput:
    """
    Persist an article's locked tail.

    Args:
        inp: Article key and locked blocks
        store: Byte store the artifact is written to
        config: Path template and public prefix

    Returns:
        PersistOutput with the public address ("" when nothing was written)
    """
    locked_store = LockedContentStore(store, config)
    address = locked_store.persist(inp.article_key, inp.locked_blocks)
    if not address:
        return PersistOutput(address="")
    return PersistOutput(
        address=address,
        path=locked_store.artifact_path(inp.article_key),
        block_count=len(inp.locked_blocks),
    )


def run(
    inp: PersistInput,
    store: FileStorePort,
    config: LockedStoreConfig | None = None,
) -> PersistOutput:
    """
    Main entry point for the locked store component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, PersistInput):
        return run_persist(inp, store, config)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
