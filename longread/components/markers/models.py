"""
Markers component models.

Annotation vocabulary and input/output models for markdown normalization.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Annotation Vocabulary ---


@dataclass(frozen=True)
class MarkerSpec:
    """
    How one named annotation expands.

    `inline` markers expand in place (spans inside a paragraph, or a
    single-line block element whose content is not re-parsed);
    `self_closing` markers have no end marker and no inner content.
    """

    name: str
    tag: str
    css_class: str
    self_closing: bool = False
    inline: bool = False


MARKER_SPECS: tuple[MarkerSpec, ...] = (
    MarkerSpec("subtitle", "p", "article-subtitle", inline=True),
    MarkerSpec("lead", "div", "article-lead"),
    MarkerSpec("divider", "div", "article-divider", self_closing=True),
    MarkerSpec("section", "div", "section-label"),
    MarkerSpec("highlight", "blockquote", "composition-highlight"),
    MarkerSpec("marker", "span", "marker-highlight", inline=True),
    MarkerSpec("emphasized", "span", "emphasized-word", inline=True),
    MarkerSpec("pullquote", "div", "pullquote article-card"),
    MarkerSpec("callout", "div", "number-callout article-card"),
    MarkerSpec("compare", "div", "two-column-compare"),
    MarkerSpec("checklist", "div", "checklist article-card"),
    MarkerSpec("footer", "footer", "article-footer"),
    MarkerSpec("component-card", "div", "component-card"),
    MarkerSpec("product-list", "div", "product-list"),
)

MARKER_MAP: dict[str, MarkerSpec] = {spec.name: spec for spec in MARKER_SPECS}

META_MARKER = "meta"
BREADCRUMB_CLASS = "article-breadcrumb"
BREADCRUMB_SEPARATOR = "·"


def component_classes() -> frozenset[str]:
    """CSS classes of every annotation that expands to a block-level wrapper."""
    return frozenset(
        spec.css_class for spec in MARKER_SPECS if spec.tag not in ("span",)
    )


# --- Input Models ---


@dataclass(frozen=True)
class NormalizeInput:
    """Input for expanding annotations into tagged markdown."""

    markdown: str


@dataclass(frozen=True)
class ExtractMetaInput:
    """Input for pulling the breadcrumb annotation out of markdown."""

    markdown: str


# --- Output Models ---


@dataclass(frozen=True)
class MetaOutput:
    """Breadcrumb text (None when absent) and the markdown without it."""

    meta: str | None
    cleaned_markdown: str


@dataclass(frozen=True)
class NormalizeOutput:
    """Expanded markdown, ready for a block-level parse."""

    markdown: str
    meta: str | None = None
    breadcrumb_html: str = ""
    expanded: tuple[str, ...] = field(default_factory=tuple)
    success: bool = True
