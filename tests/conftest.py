from pathlib import Path

import pytest

from longread.adapters.fs.filestore import FileSystemStore
from longread.rules.loader import load_rules
from longread.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent

INTRO_ARTICLE = """<!-- meta -->Course · Basics · Getting started<!-- /meta -->
# Getting started

<!-- lead -->
Why this course exists, in *one* paragraph.
<!-- /lead -->

First body paragraph with a [reference][docs].

Second body paragraph.

<!-- callout -->
**Readers**

**12 000**

Finished the course last year.
<!-- /callout -->

Third body paragraph.

Fourth body paragraph.

Fifth body paragraph.

Sixth body paragraph.

Seventh body paragraph.

[docs]: https://example.com/docs
"""

SHORT_ARTICLE = "# Short\n\nOnly paragraph.\n"


@pytest.fixture
def rules() -> Rules:
    """The project's real rules file."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def file_store(tmp_path: Path) -> FileSystemStore:
    return FileSystemStore(tmp_path / "dist")


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """
    A content tree with two branches:
    - course: scanned *.md files with numeric order prefixes
    - appendix: index.json manifest
    """
    root = tmp_path / "content"
    course = root / "course"
    course.mkdir(parents=True)
    (course / "01-getting-started.md").write_text(INTRO_ARTICLE, encoding="utf-8")
    (course / "02-short.md").write_text(SHORT_ARTICLE, encoding="utf-8")

    appendix = root / "appendix"
    appendix.mkdir()
    (appendix / "glossary.md").write_text(
        "# Glossary\n\n" + "\n\n".join(f"Term {i}." for i in range(1, 11)) + "\n",
        encoding="utf-8",
    )
    (appendix / "index.json").write_text(
        '[{"source": "glossary.md", "id": "terms", "order": 1}]', encoding="utf-8"
    )
    return root
