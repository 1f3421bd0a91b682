"""
Unit tests for blocks component.

Tests:
- Contiguous 1-based indices and token kinds
- Blank lines, comments and the breadcrumb are not counted
- Annotation wrappers group into one component block
- Reference links resolve inside a single block
- Determinism and agreement with a full-document render
"""

import pytest

from longread.components.blocks import (
    Block,
    BlockRenderer,
    ClassifyInput,
    ExtractBlocksInput,
    classify,
    extract_blocks,
    parse_document,
    run,
    run_classify,
    run_extract_blocks,
    strip_html,
)
from longread.components.markers import normalize

MIXED = """# Title

First paragraph.

- one
- two

> quoted

```
code()
```

---

| a | b |
|---|---|
| 1 | 2 |
"""


class TestIndices:
    def test_indices_are_contiguous(self) -> None:
        blocks = classify(MIXED)
        assert [b.index for b in blocks] == list(range(1, len(blocks) + 1))

    def test_token_kinds(self) -> None:
        kinds = [b.token_kind for b in classify(MIXED)]
        assert kinds == ["heading", "paragraph", "list", "blockquote", "code", "rule", "table"]

    def test_empty_document(self) -> None:
        assert classify("") == []
        assert parse_document("").render_all() == ""

    def test_heading_level(self) -> None:
        blocks = classify("# One\n\n## Two\n\nText.")
        assert [b.heading_level for b in blocks] == [1, 2, 0]


class TestNonCountable:
    def test_comments_are_not_blocks(self) -> None:
        blocks = classify("<!-- note -->\n\nPara one.\n\n<!-- another -->\n\nPara two.")
        assert [b.token_kind for b in blocks] == ["paragraph", "paragraph"]
        assert [b.index for b in blocks] == [1, 2]

    def test_breadcrumb_is_not_a_block(self) -> None:
        expanded = normalize("<!-- meta -->Course · Intro<!-- /meta -->\n# Title\n\nBody.")
        document = parse_document(expanded)
        assert [b.token_kind for b in document.blocks] == ["heading", "paragraph"]
        assert all("article-breadcrumb" not in b.html for b in document.blocks)

    def test_breadcrumb_travels_with_first_block(self) -> None:
        expanded = normalize("<!-- meta -->Course · Intro<!-- /meta -->\n# Title\n\nBody.")
        document = parse_document(expanded)
        first = document.render_range(1, 1)
        assert first.index("article-breadcrumb") < first.index("<h1>")
        assert "article-breadcrumb" not in document.render_range(2, 2)


class TestComponents:
    def test_wrapper_counts_as_one_block(self) -> None:
        expanded = normalize(
            "Intro.\n\n<!-- lead -->\nLead *text*.\n\nSecond lead para.\n<!-- /lead -->\n\nAfter."
        )
        blocks = classify(expanded)
        assert [b.token_kind for b in blocks] == ["paragraph", "component", "paragraph"]
        lead = blocks[1]
        assert lead.html.startswith('<div class="article-lead">')
        assert "<em>text</em>" in lead.html
        assert "Second lead para." in lead.html
        assert lead.html.rstrip().endswith("</div>")

    def test_compare_counts_as_one_block(self) -> None:
        expanded = normalize("<!-- compare -->\nLeft\n---\nRight\n<!-- /compare -->\n\nTail.")
        blocks = classify(expanded)
        assert [b.token_kind for b in blocks] == ["component", "paragraph"]
        assert blocks[0].html.count("compare-card") == 2

    def test_divider_is_a_component(self) -> None:
        blocks = classify(normalize("A.\n\n<!-- divider -->\n\nB."))
        assert [b.token_kind for b in blocks] == ["paragraph", "component", "paragraph"]
        assert 'class="article-divider"' in blocks[1].html

    def test_unknown_html_is_html_block(self) -> None:
        blocks = classify('<div class="custom">\nx\n</div>\n\nText.')
        assert blocks[0].token_kind == "html"


class TestRendering:
    def test_text_projection(self) -> None:
        (block,) = classify("Some **bold** text.")
        assert block.html == "<p>Some <strong>bold</strong> text.</p>\n"
        assert block.text == "Some bold text."

    def test_reference_links_resolve(self) -> None:
        blocks = classify("See [the docs][ref] here.\n\n[ref]: https://example.com/docs\n")
        assert len(blocks) == 1
        assert 'href="https://example.com/docs"' in blocks[0].html

    def test_concatenation_matches_full_render(self) -> None:
        expanded = normalize(
            "# Title\n\nOne.\n\n<!-- lead -->\nLead.\n<!-- /lead -->\n\n- a\n- b\n\nTwo."
        )
        blocks = classify(expanded)
        assert "".join(b.html for b in blocks) == BlockRenderer().render_document(expanded)

    def test_deterministic(self) -> None:
        assert classify(MIXED) == classify(MIXED)

    def test_strip_html(self) -> None:
        assert strip_html("<p>a <b>b</b>\n c</p>") == "a b c"
        assert strip_html("") == ""


class TestBlockModel:
    def test_dict_round_trip(self) -> None:
        block = Block(index=3, token_kind="paragraph", html="<p>x</p>\n", text="x")
        data = block.to_dict()
        assert data == {"index": 3, "tokenKind": "paragraph", "html": "<p>x</p>\n", "text": "x"}
        assert Block.from_dict(data) == block


class TestRun:
    def test_run_classify(self) -> None:
        result = run(ClassifyInput(markdown="One.\n\nTwo."))
        assert result.success
        assert result.total_blocks == 2

    def test_run_extract_blocks_expands_and_strips(self) -> None:
        result = run_extract_blocks(
            ExtractBlocksInput(
                markdown="# Title\n\n<!-- lead -->\nLead.\n<!-- /lead -->\n\nBody.",
                strip_leading_heading=True,
            )
        )
        assert [b.token_kind for b in result.blocks] == ["component", "paragraph"]

    def test_run_classify_does_not_expand(self) -> None:
        result = run_classify(ClassifyInput(markdown="<!-- lead -->\nLead.\n<!-- /lead -->"))
        assert [b.token_kind for b in result.blocks] == ["paragraph"]

    def test_run_unknown_input(self) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run(42)  # type: ignore[arg-type]

    def test_extract_blocks(self) -> None:
        blocks = extract_blocks("# Title\n\n<!-- divider -->\n\nBody.", strip_heading=True)
        assert [b.token_kind for b in blocks] == ["component", "paragraph"]
