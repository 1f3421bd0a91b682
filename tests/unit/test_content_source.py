"""
Content source tests.

Tests:
- Directory scan: numeric prefix order, slug and title extraction
- Manifest: explicit ids, order and unsafe entries
- Lookup by article key
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from longread.adapters.content_source import ContentSource, extract_title, slugify
from longread.components.locked_store import ArticleKey


class TestHelpers:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Getting Started", "getting-started"),
            ("  Hello,   World! ", "hello-world"),
            ("snake_case", "snake_case"),
            ("Введение в курс", "введение-в-курс"),
            ("a -- b", "a-b"),
        ],
    )
    def test_slugify(self, value: str, expected: str) -> None:
        assert slugify(value) == expected

    def test_extract_title(self) -> None:
        assert extract_title("Intro\n\n# The Title #\n\n## Sub") == "The Title"
        assert extract_title("## Only sub") is None


class TestScan:
    def test_scan_orders_by_prefix(self, tmp_path: Path) -> None:
        branch = tmp_path / "course"
        branch.mkdir()
        (branch / "notes.md").write_text("No heading.")
        (branch / "02_Second Part.md").write_text("# Second\n\nBody.")
        (branch / "01-getting-started.md").write_text("# First\n\nBody.")

        articles = ContentSource(tmp_path, ["course"]).load_branch("course")

        assert [a.slug for a in articles] == ["getting-started", "second-part", "notes"]
        assert [a.order for a in articles] == [1, 2, 999]
        assert [a.title for a in articles] == ["First", "Second", "notes"]
        assert articles[0].key == ArticleKey("course", "getting-started")

    def test_missing_branch(self, tmp_path: Path) -> None:
        assert ContentSource(tmp_path, ["nope"]).load_all() == []


class TestManifest:
    def test_manifest_entries(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        branch = tmp_path / "appendix"
        branch.mkdir()
        (branch / "a.md").write_text("# Alpha doc\n")
        (branch / "b.md").write_text("# Beta doc\n")
        (tmp_path / "outside.md").write_text("# Outside\n")
        (branch / "index.json").write_text(
            '[{"source": "a.md", "id": "alpha", "title": "Alpha", "order": 2},'
            ' {"source": "b.md", "order": 1},'
            ' {"source": "../outside.md"},'
            ' {"source": "missing.md"},'
            ' {"title": "no source"}]'
        )

        with caplog.at_level(logging.WARNING):
            articles = ContentSource(tmp_path, ["appendix"]).load_branch("appendix")

        assert [(a.slug, a.title, a.order) for a in articles] == [
            ("b", "Beta doc", 1),
            ("alpha", "Alpha", 2),
        ]
        assert "Path traversal" in caplog.text
        assert "missing.md" in caplog.text

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        branch = tmp_path / "appendix"
        branch.mkdir()
        (branch / "index.json").write_text("{broken")
        with pytest.raises(ValueError, match="Invalid manifest"):
            ContentSource(tmp_path, ["appendix"]).load_branch("appendix")


class TestLookup:
    def test_load_all_and_get(self, content_root: Path) -> None:
        source = ContentSource(content_root, ["course", "appendix"])
        keys = [a.key.key for a in source.load_all()]
        assert keys == ["course/getting-started", "course/short", "appendix/terms"]

        article = source.get(ArticleKey("course", "short"))
        assert article is not None
        assert article.title == "Short"
        assert source.get(ArticleKey("course", "nope")) is None
