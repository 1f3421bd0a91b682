"""
Content source - Articles grouped by branch directory.

A branch directory either carries an index.json manifest
(list of {source, id?, title?, order?}) or is scanned for *.md files, where
a numeric filename prefix gives the order and the rest gives the slug.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from longread.components.locked_store import ArticleKey

logger = logging.getLogger(__name__)

DEFAULT_ORDER = 999
MANIFEST_NAME = "index.json"

_ORDER_PREFIX = re.compile(r"^(\d+)[-_.]?")
_H1 = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)
_SLUG_DROP = re.compile(r"[^a-z0-9а-яё\-\s_]")
_SLUG_SPACE = re.compile(r"\s+")
_SLUG_DASHES = re.compile(r"-+")


def slugify(value: str) -> str:
    slug = _SLUG_DROP.sub("", value.strip().lower())
    slug = _SLUG_SPACE.sub("-", slug)
    return _SLUG_DASHES.sub("-", slug)


def extract_title(markdown: str) -> str | None:
    match = _H1.search(markdown)
    return match.group(1) if match else None


@dataclass(frozen=True)
class ArticleSource:
    """One article's markdown and its place in the branch."""

    branch: str
    slug: str
    title: str
    order: int
    path: Path
    markdown: str

    @property
    def key(self) -> ArticleKey:
        return ArticleKey(branch=self.branch, slug=self.slug)


class ContentSource:
    """Loads articles from `<root>/<branch>/`."""

    def __init__(self, root: str | Path, branches: list[str]):
        self.root = Path(root).resolve()
        self.branches = list(branches)

    def _safe_path(self, branch_dir: Path, source: str) -> Path:
        target = (branch_dir / source).resolve()
        if branch_dir not in target.parents:
            raise ValueError(f"Path traversal attempt detected: {source}")
        return target

    def _from_manifest(self, branch: str, branch_dir: Path, manifest: Any) -> list[ArticleSource]:
        if not isinstance(manifest, list):
            logger.warning("Manifest for branch %s is not a list", branch)
            return []

        items: list[ArticleSource] = []
        for item in manifest:
            if not isinstance(item, dict) or not item.get("source"):
                continue
            try:
                path = self._safe_path(branch_dir, str(item["source"]))
            except ValueError as e:
                logger.warning("Skipping %s: %s", item["source"], e)
                continue
            if not path.is_file():
                logger.warning("Skipping %s: file not found", item["source"])
                continue

            markdown = path.read_text(encoding="utf-8")
            order = item.get("order")
            items.append(
                ArticleSource(
                    branch=branch,
                    slug=str(item.get("id") or slugify(path.stem)),
                    title=str(item.get("title") or extract_title(markdown) or path.stem),
                    order=order if isinstance(order, int) else DEFAULT_ORDER,
                    path=path,
                    markdown=markdown,
                )
            )
        return items

    def _scan(self, branch: str, branch_dir: Path) -> list[ArticleSource]:
        items: list[ArticleSource] = []
        for path in sorted(branch_dir.glob("*.md")):
            markdown = path.read_text(encoding="utf-8")
            order_match = _ORDER_PREFIX.match(path.name)
            slug = slugify(_ORDER_PREFIX.sub("", path.stem, count=1)) or path.stem
            items.append(
                ArticleSource(
                    branch=branch,
                    slug=slug,
                    title=extract_title(markdown) or slug,
                    order=int(order_match.group(1)) if order_match else DEFAULT_ORDER,
                    path=path,
                    markdown=markdown,
                )
            )
        return items

    def load_branch(self, branch: str) -> list[ArticleSource]:
        branch_dir = self.root / branch
        if not branch_dir.is_dir():
            return []

        manifest_path = branch_dir / MANIFEST_NAME
        if manifest_path.is_file():
            try:
                manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid manifest {manifest_path}: {e}") from e
            items = self._from_manifest(branch, branch_dir.resolve(), manifest)
        else:
            items = self._scan(branch, branch_dir)

        return sorted(items, key=lambda a: a.order)

    def load_all(self) -> list[ArticleSource]:
        articles: list[ArticleSource] = []
        for branch in self.branches:
            articles.extend(self.load_branch(branch))
        return articles

    def get(self, key: ArticleKey) -> ArticleSource | None:
        for article in self.load_branch(key.branch):
            if article.slug == key.slug:
                return article
        return None
