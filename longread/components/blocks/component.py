"""
Blocks component - Classify normalized markdown into countable blocks.

Invariants:
- Block indices are exactly 1..total, contiguous and strictly increasing
- Blank lines, HTML comments and the breadcrumb are never counted
- An annotation wrapper with its inner content counts as one block
- Identical input yields byte-identical blocks
"""

from __future__ import annotations

from longread.components.markers import normalize, strip_leading_heading

from ._impl import BlockRenderer, ClassifiedDocument, classify_document
from .models import Block, ClassifyInput, ClassifyOutput, ExtractBlocksInput


def parse_document(
    expanded_markdown: str,
    renderer: BlockRenderer | None = None,
) -> ClassifiedDocument:
    """Classify normalized markdown, keeping the parse state for re-rendering."""
    return classify_document(expanded_markdown, renderer)


def classify(expanded_markdown: str) -> list[Block]:
    """classify(expandedMarkdown) -> Block[]."""
    return list(classify_document(expanded_markdown).blocks)


def extract_blocks(markdown: str, strip_heading: bool = False) -> list[Block]:
    """Indexed block listing of raw article markdown (annotations expanded)."""
    return list(run_extract_blocks(ExtractBlocksInput(markdown, strip_heading)).blocks)


# --- Component Entry Points ---


def run_classify(inp: ClassifyInput) -> ClassifyOutput:
    """
    Classify normalized markdown.

    Args:
        inp: Input containing markdown already passed through the markers component.

    Returns:
        ClassifyOutput with indexed blocks.
    """
    document = classify_document(inp.markdown)
    return ClassifyOutput(blocks=document.blocks, total_blocks=document.total_blocks)


def run_extract_blocks(inp: ExtractBlocksInput) -> ClassifyOutput:
    """
    List the blocks of raw article markdown (editor preview).

    Annotations are expanded first, exactly as in a build.
    """
    markdown = inp.markdown or ""
    if inp.strip_leading_heading:
        markdown = strip_leading_heading(markdown)
    document = classify_document(normalize(markdown))
    return ClassifyOutput(blocks=document.blocks, total_blocks=document.total_blocks)


def run(inp: ClassifyInput | ExtractBlocksInput) -> ClassifyOutput:
    """
    Main entry point for the blocks component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ClassifyInput):
        return run_classify(inp)
    elif isinstance(inp, ExtractBlocksInput):
        return run_extract_blocks(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
