"""
Locked Content Routes - Serve locked content artifacts.

Artifacts are served at their public address. Every build rewrites them,
so responses are never cached.

Headers:
- Content-Type: application/json; charset=utf-8
- Cache-Control: no-cache
"""

import re

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from longread.api.deps import get_locked_store, get_rules
from longread.components.locked_store import ArticleKey, LockedContentStore
from longread.rules.models import Rules

router = APIRouter()

CACHE_CONTROL_NO_CACHE = "no-cache"


def template_pattern(path_template: str) -> re.Pattern[str]:
    """Regex matching the paths a template can produce."""
    escaped = re.escape(path_template)
    escaped = escaped.replace(r"\{branch\}", r"(?P<branch>[^/]+)")
    escaped = escaped.replace(r"\{slug\}", r"(?P<slug>[^/]+)")
    return re.compile(f"^{escaped}$")


@router.get("/{artifact_path:path}")
def get_locked_content(
    artifact_path: str,
    locked_store: LockedContentStore = Depends(get_locked_store),
    rules: Rules = Depends(get_rules),
) -> Response:
    """Serve one locked content artifact."""
    prefix = rules.locked_store.public_prefix.strip("/")
    if prefix:
        if not artifact_path.startswith(prefix + "/"):
            raise HTTPException(status_code=404, detail="Not found")
        artifact_path = artifact_path[len(prefix) + 1 :]

    match = template_pattern(locked_store.config.path_template).match(artifact_path)
    if match is None:
        raise HTTPException(status_code=404, detail="Not found")

    key = ArticleKey(branch=match.group("branch"), slug=match.group("slug"))
    try:
        data = locked_store.store.get(locked_store.artifact_path(key))
    except (FileNotFoundError, ValueError):
        raise HTTPException(status_code=404, detail="Locked content not found") from None

    return Response(
        content=data,
        media_type="application/json; charset=utf-8",
        headers={"Cache-Control": CACHE_CONTROL_NO_CACHE},
    )
