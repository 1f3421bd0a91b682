"""
Annotation expansion for article markdown.

Annotations are HTML comments in the source markdown:

    <!-- lead -->
    Some *markdown*.
    <!-- /lead -->

Block annotations become a tagged wrapper around the still-markdown inner
content, separated by blank lines so the block parser keeps parsing the
inner content as markdown. Nested or overlapping block annotations, and
start markers without an end marker, are left as literal text.
"""

from __future__ import annotations

import html
import re

from .models import (
    BREADCRUMB_CLASS,
    BREADCRUMB_SEPARATOR,
    MARKER_MAP,
    MARKER_SPECS,
    META_MARKER,
    MarkerSpec,
)

META_RE = re.compile(
    rf"<!--\s*{META_MARKER}\s*-->\s*(.*?)\s*<!--\s*/{META_MARKER}\s*-->", re.DOTALL
)
ANY_MARKER_RE = re.compile(r"<!--\s*[a-z][a-z-]*\s*-->")
LEADING_PREFIX = (
    r"\A((?:\s*(?:<!--\s*meta\s*-->.*?<!--\s*/meta\s*-->|<!--(?:(?!-->).)*-->))*\s*)"
)
LEADING_H1_RE = re.compile(LEADING_PREFIX + r"#[ \t]+[^\n]*(?:\n|\Z)", re.DOTALL)
H1_LINE_RE = re.compile(r"^#[ \t]+\S")
FENCE_RE = re.compile(r"^[ \t]{0,3}(`{3,}|~{3,})")
HR_LINE_RE = re.compile(r"^[ \t]*---[ \t]*$", re.MULTILINE)
PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n+")
BOLD_LINE_RE = re.compile(r"^\*\*(.+?)\*\*$")
CHECKLIST_RE = re.compile(r"^\*\*(.+?)\*\*[ \t]*\n\n?([\s\S]*)$")
CHECK_ITEM_RE = re.compile(r"^\s*[*-]\s+")
QUOTE_PREFIX_RE = re.compile(r"^[ \t]*>[ \t]?", re.MULTILINE)


def _names(specs: list[MarkerSpec]) -> str:
    return "|".join(re.escape(spec.name) for spec in specs)


_SPANS = [s for s in MARKER_SPECS if s.tag == "span"]
_BLOCKS = [s for s in MARKER_SPECS if s.tag != "span" and not s.self_closing]
_SELF_CLOSING = [s for s in MARKER_SPECS if s.self_closing]

SPAN_RE = re.compile(rf"<!--\s*({_names(_SPANS)})\s*-->(.*?)<!--\s*/\1\s*-->", re.DOTALL)
BLOCK_START_RE = re.compile(
    rf"<!--\s*(?:({_names(_BLOCKS)})|({_names(_SELF_CLOSING)}))\s*-->"
)
BLOCK_ANY_RE = re.compile(
    rf"<!--\s*/?(?:{_names(_BLOCKS)}|{_names(_SELF_CLOSING)})\s*-->"
)


def _end_re(name: str) -> re.Pattern[str]:
    return re.compile(rf"<!--\s*/{re.escape(name)}\s*-->")


_END_RES = {spec.name: _end_re(spec.name) for spec in _BLOCKS}


def escape_html(text: str) -> str:
    return html.escape(text, quote=True)


def extract_meta(markdown: str) -> tuple[str | None, str]:
    """Return (meta text, markdown without the first meta region)."""
    match = META_RE.search(markdown)
    if not match:
        return None, markdown
    cleaned = markdown[: match.start()] + markdown[match.end() :]
    return match.group(1).strip(), cleaned


def render_breadcrumb(text: str | None) -> str:
    """Render "Parent · Child · Current" as breadcrumb navigation."""
    if not text:
        return ""

    parts = [part.strip() for part in text.split(BREADCRUMB_SEPARATOR)]
    out = [f'<nav class="{BREADCRUMB_CLASS}">']

    if len(parts) == 1:
        out.append(f"<span>{escape_html(parts[0])}</span>")
    else:
        for i, part in enumerate(parts[:-1]):
            out.append(f'<a href="#">{escape_html(part)}</a>')
            if i < len(parts) - 2:
                out.append('<span class="separator"> · </span>')
        out.append('<span class="separator"> · </span>')
        out.append(f'<span class="current">{escape_html(parts[-1])}</span>')

    out.append("</nav>")
    return "".join(out)


def _first_h1_offset(markdown: str) -> int | None:
    """Offset of the first `# ` heading line outside fenced code, None if absent."""
    offset = 0
    fence: str | None = None
    for line in markdown.splitlines(keepends=True):
        fence_match = FENCE_RE.match(line)
        if fence is not None:
            marker = fence_match.group(1) if fence_match else ""
            if marker[:1] == fence[0] and len(marker) >= len(fence):
                fence = None
        elif fence_match:
            fence = fence_match.group(1)
        elif H1_LINE_RE.match(line):
            return offset
        offset += len(line)
    return None


def insert_breadcrumb(markdown: str, breadcrumb_html: str) -> str:
    """Place the breadcrumb before the first level-1 heading, else at the top."""
    if not breadcrumb_html:
        return markdown
    block = f"{breadcrumb_html}\n\n"
    offset = _first_h1_offset(markdown)
    if offset is None:
        return block + markdown
    head = markdown[:offset]
    if head.strip() and not head.endswith("\n\n"):
        # an HTML block must not continue the previous paragraph
        head += "\n"
    return head + block + markdown[offset:]


def strip_leading_heading(markdown: str) -> str:
    """Drop the leading `# Title` line (comments before it are kept)."""
    return LEADING_H1_RE.sub(lambda m: m.group(1), markdown, count=1)


def has_markers(markdown: str) -> bool:
    return bool(ANY_MARKER_RE.search(markdown or ""))


# --- Wrappers ---


def _block(body: str) -> str:
    return f"\n\n{body}\n\n"


def _wrap_generic(spec: MarkerSpec, inner: str) -> str:
    if spec.inline:
        text = " ".join(inner.split())
        return _block(f'<{spec.tag} class="{spec.css_class}">{text}</{spec.tag}>')
    return _block(
        f'<{spec.tag} class="{spec.css_class}">\n\n{inner.strip()}\n\n</{spec.tag}>'
    )


def _wrap_compare(spec: MarkerSpec, inner: str) -> str | None:
    halves = HR_LINE_RE.split(inner)
    if len(halves) != 2:
        return None
    left, right = (half.strip() for half in halves)
    return _block(
        f'<{spec.tag} class="{spec.css_class}">\n'
        f'<div class="compare-card">\n\n{left}\n\n</div>\n'
        f'<div class="compare-card">\n\n{right}\n\n</div>\n'
        f"</{spec.tag}>"
    )


def _wrap_callout(spec: MarkerSpec, inner: str) -> str | None:
    # **Label**\n\n**Value**\n\nDescription
    parts = PARAGRAPH_SPLIT_RE.split(inner.strip())
    if len(parts) < 2:
        return None

    label_match = BOLD_LINE_RE.match(parts[0].strip())
    value_match = BOLD_LINE_RE.match(parts[1].strip())
    label = label_match.group(1) if label_match else parts[0].strip()
    value = value_match.group(1) if value_match else parts[1].strip()
    description = "\n\n".join(parts[2:]).strip()

    head = (
        f'<{spec.tag} class="{spec.css_class}">\n'
        f'<div class="number-callout-label">{escape_html(label)}</div>\n'
        f'<div class="number-callout-value">{escape_html(value)}</div>'
    )
    if not description:
        return _block(f"{head}\n</{spec.tag}>")
    return _block(
        f'{head}\n<div class="number-callout-text">\n\n{description}\n\n</div>\n</{spec.tag}>'
    )


def _wrap_checklist(spec: MarkerSpec, inner: str) -> str | None:
    # **Title** followed by * or - items
    match = CHECKLIST_RE.match(inner.strip())
    if not match:
        return None

    items = [
        CHECK_ITEM_RE.sub("", line).strip()
        for line in match.group(2).strip().split("\n")
        if CHECK_ITEM_RE.match(line)
    ]
    if not items:
        return None

    list_html = "<ul>" + "".join(f"<li>{item}</li>" for item in items) + "</ul>"
    return _block(
        f'<{spec.tag} class="{spec.css_class}">\n'
        f'<div class="checklist-title">{escape_html(match.group(1))}</div>\n'
        f"{list_html}\n"
        f"</{spec.tag}>"
    )


def _wrap_highlight(spec: MarkerSpec, inner: str) -> str | None:
    return _wrap_generic(spec, QUOTE_PREFIX_RE.sub("", inner))


_SPECIAL = {
    "compare": _wrap_compare,
    "callout": _wrap_callout,
    "checklist": _wrap_checklist,
    "highlight": _wrap_highlight,
}


class MarkerExpander:
    """Expands annotation regions into tagged wrappers."""

    def __init__(self) -> None:
        self.expanded: list[str] = []

    def expand(self, markdown: str) -> str:
        text = SPAN_RE.sub(self._expand_span, markdown)
        return self._expand_blocks(text)

    def _expand_span(self, match: re.Match[str]) -> str:
        spec = MARKER_MAP[match.group(1)]
        inner = match.group(2)
        if ANY_MARKER_RE.search(inner):
            return match.group(0)
        self.expanded.append(spec.name)
        return f'<{spec.tag} class="{spec.css_class}">{inner.strip()}</{spec.tag}>'

    def _expand_blocks(self, text: str) -> str:
        out: list[str] = []
        pos = 0

        while True:
            start = BLOCK_START_RE.search(text, pos)
            if start is None:
                out.append(text[pos:])
                break

            if start.group(2):
                spec = MARKER_MAP[start.group(2)]
                out.append(text[pos : start.start()])
                out.append(_block(f'<{spec.tag} class="{spec.css_class}"></{spec.tag}>'))
                self.expanded.append(spec.name)
                pos = start.end()
                continue

            spec = MARKER_MAP[start.group(1)]
            end = _END_RES[spec.name].search(text, start.end())
            if end is None:
                # unterminated: keep the start marker as literal text
                out.append(text[pos : start.end()])
                pos = start.end()
                continue

            inner = text[start.end() : end.start()]
            if BLOCK_ANY_RE.search(inner):
                # nested or overlapping regions stay literal
                out.append(text[pos : end.end()])
                pos = end.end()
                continue

            out.append(text[pos : start.start()])
            out.append(self._wrap(spec, inner))
            self.expanded.append(spec.name)
            pos = end.end()

        return "".join(out)

    def _wrap(self, spec: MarkerSpec, inner: str) -> str:
        special = _SPECIAL.get(spec.name)
        if special is not None:
            wrapped = special(spec, inner)
            if wrapped is not None:
                return wrapped
        return _wrap_generic(spec, inner)


def normalize_markdown(markdown: str) -> tuple[str, str | None, str, tuple[str, ...]]:
    """
    Extract the breadcrumb, expand annotations and re-insert the breadcrumb.

    Returns (expanded markdown, meta text, breadcrumb html, expanded marker names).
    """
    meta, cleaned = extract_meta(markdown)
    expander = MarkerExpander()
    expanded = expander.expand(cleaned)
    breadcrumb_html = render_breadcrumb(meta)
    return (
        insert_breadcrumb(expanded, breadcrumb_html),
        meta,
        breadcrumb_html,
        tuple(expander.expanded),
    )
