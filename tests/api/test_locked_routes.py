"""
Locked content route tests.

Tests:
- Artifacts served at their public address with Cache-Control: no-cache
- Unknown, malformed and traversal paths return 404
- Public prefix is honoured
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from longread.adapters.fs.filestore import FileSystemStore
from longread.api.deps import get_file_store, get_rules
from longread.api.routes import locked
from longread.api.routes.locked import template_pattern
from longread.components.blocks import Block
from longread.components.locked_store import ArticleKey, persist
from longread.rules.models import Rules

# --- Test Setup ---


@pytest.fixture
def app(rules: Rules, file_store: FileSystemStore) -> Iterator[FastAPI]:
    """Test FastAPI app with the locked content route."""
    app = FastAPI()
    app.include_router(locked.router)
    app.dependency_overrides[get_file_store] = lambda: file_store
    app.dependency_overrides[get_rules] = lambda: rules
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def artifact(file_store: FileSystemStore) -> str:
    blocks = [Block(index=1, token_kind="paragraph", html="<p>Locked</p>\n", text="Locked")]
    return persist(ArticleKey("course", "intro"), blocks, file_store)


class TestTemplatePattern:
    def test_matches_template(self) -> None:
        pattern = template_pattern("content/locked/{branch}/{slug}.json")
        match = pattern.match("content/locked/course/intro.json")
        assert match is not None
        assert match.group("branch") == "course"
        assert match.group("slug") == "intro"

    def test_rejects_nested_segments(self) -> None:
        pattern = template_pattern("content/locked/{branch}/{slug}.json")
        assert pattern.match("content/locked/course/a/b.json") is None
        assert pattern.match("content/locked/course/intro.html") is None


class TestServeArtifact:
    def test_serves_artifact(self, client: TestClient, artifact: str) -> None:
        response = client.get(artifact)

        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-cache"
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "blocks": [{"index": 1, "tokenKind": "paragraph", "html": "<p>Locked</p>\n", "text": "Locked"}]
        }

    def test_missing_artifact(self, client: TestClient) -> None:
        assert client.get("/content/locked/course/nope.json").status_code == 404

    def test_path_outside_template(self, client: TestClient, artifact: str) -> None:
        assert client.get("/rules.yaml").status_code == 404
        assert client.get("/content/other/course/intro.json").status_code == 404

    def test_encoded_traversal(self, client: TestClient) -> None:
        response = client.get("/content/locked/..%2F..%2F..%2F..%2Fsecret/x.json")
        assert response.status_code == 404


class TestPublicPrefix:
    def test_prefixed_address(
        self, app: FastAPI, rules: Rules, file_store: FileSystemStore
    ) -> None:
        prefixed = rules.model_copy(
            update={"locked_store": rules.locked_store.model_copy(update={"public_prefix": "/static/"})}
        )
        app.dependency_overrides[get_rules] = lambda: prefixed
        client = TestClient(app)
        blocks = [Block(index=1, token_kind="paragraph", html="<p>x</p>\n", text="x")]
        persist(ArticleKey("course", "intro"), blocks, file_store)

        assert client.get("/static/content/locked/course/intro.json").status_code == 200
        assert client.get("/content/locked/course/intro.json").status_code == 404
