"""
Paywall Build Service - Per-article segmentation and locked tail output.

Key behaviors:
- Each article: normalize -> classify -> segment -> persist locked tail
- Overrides are looked up by "<branch>/<slug>" and read once per build
- Articles never fail the build on content; an unsafe key is reported
  as skipped
- Shared partials are loaded lazily once per service and reused
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from longread.adapters.content_source import ArticleSource
from longread.components.embed import EmbedInput, render_paywall_region
from longread.components.locked_store import (
    ArticleKey,
    FileStorePort,
    LockedContentStore,
    LockedStoreConfig,
)
from longread.components.segmentation import (
    PaywallOverride,
    SegmentationConfig,
    SegmentationResult,
    segment_markdown,
)
from longread.components.unlock import UnlockMessages
from longread.rules.models import Rules

logger = logging.getLogger(__name__)

HINT_PARTIAL = "paywall-hint.html"

# --- Configuration ---


@dataclass(frozen=True)
class BuildConfig:
    """Build configuration from rules."""

    strategy: str = "primary"
    strip_leading_heading: bool = True
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
    store: LockedStoreConfig = field(default_factory=LockedStoreConfig)
    messages: UnlockMessages = field(default_factory=UnlockMessages)

    @classmethod
    def from_rules(cls, rules: Rules) -> BuildConfig:
        paywall = rules.paywall
        return cls(
            strategy=paywall.strategy,
            strip_leading_heading=rules.content.strip_leading_heading,
            segmentation=SegmentationConfig(
                open_ratio=paywall.open_ratio,
                default_teaser_blocks=paywall.default_teaser_blocks,
                intro_labels=tuple(paywall.editorial.intro_labels),
                max_intro_paragraphs=paywall.editorial.max_intro_paragraphs,
                teaser_paragraphs=paywall.editorial.teaser_paragraphs,
            ),
            store=LockedStoreConfig(
                path_template=rules.locked_store.path_template,
                public_prefix=rules.locked_store.public_prefix,
            ),
            messages=UnlockMessages(**rules.unlock.messages.model_dump()),
        )


# --- Partials ---


@dataclass
class PartialCache:
    """
    Lazily loaded HTML partials owned by one build.

    A missing directory or file yields the default; each name is read at
    most once.
    """

    partials_dir: Path | None = None
    _cache: dict[str, str | None] = field(default_factory=dict)
    reads: int = 0

    def get(self, name: str, default: str = "") -> str:
        if name not in self._cache:
            self._cache[name] = self._read(name)
        cached = self._cache[name]
        return default if cached is None else cached

    def _read(self, name: str) -> str | None:
        if self.partials_dir is None:
            return None
        path = self.partials_dir / name
        if not path.is_file():
            return None
        self.reads += 1
        return path.read_text(encoding="utf-8").strip()


# --- Results ---


@dataclass(frozen=True)
class ArticleBuildResult:
    """Outcome of building one article."""

    key: ArticleKey
    segmentation: SegmentationResult
    address: str
    page_html: str


@dataclass(frozen=True)
class SkippedArticle:
    key: ArticleKey
    reason: str


@dataclass
class BuildReport:
    built: list[ArticleBuildResult] = field(default_factory=list)
    skipped: list[SkippedArticle] = field(default_factory=list)

    @property
    def locked_artifacts(self) -> int:
        return sum(1 for r in self.built if r.address)


# --- Service ---


class PaywallBuildService:
    """Builds paywalled article bodies and their locked content artifacts."""

    def __init__(
        self,
        store: FileStorePort,
        config: BuildConfig | None = None,
        overrides: Mapping[str, PaywallOverride] | None = None,
        partials: PartialCache | None = None,
    ) -> None:
        self.config = config or BuildConfig()
        self.overrides = dict(overrides or {})
        self.partials = partials or PartialCache()
        self.locked_store = LockedContentStore(store, self.config.store)

    def hint_html(self) -> str:
        """Hint text shown above the locked body until the first reveal."""
        return self.partials.get(HINT_PARTIAL, html.escape(self.config.messages.hint, quote=False))

    def segment(self, key: ArticleKey, markdown: str) -> SegmentationResult:
        return segment_markdown(
            markdown,
            override=self.overrides.get(key.key),
            strategy=self.config.strategy,
            config=self.config.segmentation,
            strip_heading=self.config.strip_leading_heading,
        )

    def build_article(self, key: ArticleKey, markdown: str) -> ArticleBuildResult:
        """
        Segment one article and persist its locked tail.

        Raises:
            ValueError: the article key escapes the output directory
        """
        result = self.segment(key, markdown)
        address = self.locked_store.persist(key, result.locked_blocks)

        page_html = render_paywall_region(
            EmbedInput(
                open_html=result.open_html,
                teaser_html=result.teaser_html,
                locked_src=address,
                hint_html=self.hint_html(),
                action_label=self.config.messages.add_label,
            )
        )

        logger.info(
            "Built %s: total=%d open=%d teaser=%d locked=%d strategy=%s",
            key.key,
            result.total_block_count,
            result.open_block_count,
            result.teaser_block_count,
            result.locked_count,
            result.strategy,
        )
        return ArticleBuildResult(key=key, segmentation=result, address=address, page_html=page_html)

    def build_all(self, articles: Iterable[ArticleSource]) -> BuildReport:
        report = BuildReport()
        for article in articles:
            try:
                report.built.append(self.build_article(article.key, article.markdown))
            except ValueError as e:
                logger.warning("Skipping %s: %s", article.key.key, e)
                report.skipped.append(SkippedArticle(key=article.key, reason=str(e)))
        return report
