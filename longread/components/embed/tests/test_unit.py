"""
Unit tests for embed component.

Tests:
- Open and teaser HTML inlined in order
- Root carries the locked address; hint and action only with a tail
- Rendered region round-trips through the embedding reader
"""

import pytest

from longread.components.embed import EmbedInput, render_paywall_region, run
from longread.components.unlock import read_embedding

ADDRESS = "/content/locked/course/intro.json"


class TestRender:
    def test_open_then_teaser(self) -> None:
        out = render_paywall_region(
            EmbedInput(open_html="<p>Open</p>\n", teaser_html="<p>Teaser</p>\n", locked_src=ADDRESS)
        )
        assert out.index("<p>Open</p>") < out.index("<p>Teaser</p>") < out.index("data-paywall-root")
        assert '<div class="article-teaser">' in out

    def test_no_teaser_wrapper_when_empty(self) -> None:
        out = render_paywall_region(EmbedInput(open_html="<p>Open</p>\n", locked_src=ADDRESS))
        assert "article-teaser" not in out

    def test_root_attributes(self) -> None:
        out = render_paywall_region(EmbedInput(open_html="", locked_src=ADDRESS))
        assert f'data-paywall-root data-locked-src="{ADDRESS}"' in out
        assert "data-locked-body" in out
        assert "data-paywall-add" in out

    def test_hint_markup_inserted_verbatim(self) -> None:
        out = render_paywall_region(
            EmbedInput(open_html="", locked_src=ADDRESS, hint_html="Press <b>Add</b>")
        )
        assert '<p class="paywall-text__hint">Press <b>Add</b></p>' in out

    def test_no_tail_has_no_hint_or_action(self) -> None:
        out = render_paywall_region(EmbedInput(open_html="<p>All</p>", hint_html="Hint"))
        assert 'data-locked-src=""' in out
        assert "paywall-text__hint" not in out
        assert "data-paywall-add" not in out

    def test_address_is_escaped(self) -> None:
        out = render_paywall_region(EmbedInput(open_html="", locked_src='/a"b.json'))
        assert 'data-locked-src="/a&quot;b.json"' in out

    def test_action_label(self) -> None:
        out = render_paywall_region(
            EmbedInput(open_html="", locked_src=ADDRESS, action_label="Next <part>")
        )
        assert "Next &lt;part&gt;" in out


class TestContract:
    def test_reader_finds_rendered_region(self) -> None:
        out = render_paywall_region(EmbedInput(open_html="<p>x</p>", locked_src=ADDRESS, hint_html="Hint"))
        embedding = read_embedding(out)
        assert embedding.found
        assert embedding.locked_src == ADDRESS
        assert embedding.has_hint

    def test_run(self) -> None:
        output = run(EmbedInput(open_html="<p>x</p>", locked_src=ADDRESS))
        assert output.has_locked_tail
        assert not run(EmbedInput(open_html="<p>x</p>")).has_locked_tail

    def test_run_unknown_input(self) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run(object())  # type: ignore[arg-type]
