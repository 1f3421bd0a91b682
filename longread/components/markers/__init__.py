"""
Markers component - Annotation expansion for article markdown.
"""

from ._impl import (
    MarkerExpander,
    has_markers,
    render_breadcrumb,
    strip_leading_heading,
)
from .component import (
    normalize,
    run,
    run_extract_meta,
    run_normalize,
)
from .models import (
    BREADCRUMB_CLASS,
    MARKER_MAP,
    MARKER_SPECS,
    ExtractMetaInput,
    MarkerSpec,
    MetaOutput,
    NormalizeInput,
    NormalizeOutput,
    component_classes,
)

__all__ = [
    # Entry points
    "normalize",
    "run",
    "run_extract_meta",
    "run_normalize",
    # Input models
    "ExtractMetaInput",
    "NormalizeInput",
    # Output models
    "MetaOutput",
    "NormalizeOutput",
    # Vocabulary
    "BREADCRUMB_CLASS",
    "MARKER_MAP",
    "MARKER_SPECS",
    "MarkerSpec",
    "component_classes",
    # Helpers
    "MarkerExpander",
    "has_markers",
    "render_breadcrumb",
    "strip_leading_heading",
]
