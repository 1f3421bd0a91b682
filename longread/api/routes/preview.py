"""
Preview API Routes - Block listing and segmentation preview for editors.

Editors use the block listing to choose override values.
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from longread.api.deps import get_rules
from longread.components.blocks import ExtractBlocksInput, run_extract_blocks
from longread.components.segmentation import PaywallOverride, segment_markdown
from longread.core.services.paywall_build import BuildConfig
from longread.rules.models import Rules

router = APIRouter()


# --- Request/Response Models ---


class BlocksRequest(BaseModel):
    """Raw article markdown to list blocks for."""

    markdown: str = Field(..., description="Article markdown with annotations")
    strip_leading_heading: bool = Field(default=False, description="Drop the leading # title")


class BlockModel(BaseModel):
    index: int
    tokenKind: str
    html: str
    text: str


class BlocksResponse(BaseModel):
    blocks: list[BlockModel]
    totalBlocks: int


class OverrideModel(BaseModel):
    openBlocks: float
    teaserBlocks: float | None = None


class SegmentRequest(BaseModel):
    markdown: str
    override: OverrideModel | None = None
    strategy: Literal["primary", "editorial", "divider"] | None = None
    strip_leading_heading: bool = False


# --- Routes ---


@router.post("/blocks", response_model=BlocksResponse)
def preview_blocks(request: BlocksRequest) -> dict[str, Any]:
    """List the countable blocks of an article."""
    output = run_extract_blocks(
        ExtractBlocksInput(
            markdown=request.markdown,
            strip_leading_heading=request.strip_leading_heading,
        )
    )
    return {
        "blocks": [block.to_dict() for block in output.blocks],
        "totalBlocks": output.total_blocks,
    }


@router.post("/segment")
def preview_segment(request: SegmentRequest, rules: Rules = Depends(get_rules)) -> dict[str, Any]:
    """Segment an article as the build would."""
    config = BuildConfig.from_rules(rules)
    override = PaywallOverride.from_mapping(request.override.model_dump()) if request.override else None
    result = segment_markdown(
        request.markdown,
        override=override,
        strategy=request.strategy or config.strategy,
        config=config.segmentation,
        strip_heading=request.strip_leading_heading,
    )
    data = result.to_dict()
    data["lockedBlocks"] = [block.to_dict() for block in result.locked_blocks]
    data["override"] = override.to_dict() if override else None
    return data
