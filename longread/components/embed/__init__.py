"""
Embed component - Paywall region page markup.
"""

from .component import render_paywall_region, run, run_embed
from .models import BODY_ATTR, HINT_CLASS, ROOT_ATTR, SRC_ATTR, EmbedInput, EmbedOutput

__all__ = [
    # Entry points
    "render_paywall_region",
    "run",
    "run_embed",
    # Models
    "EmbedInput",
    "EmbedOutput",
    # Contract attributes
    "BODY_ATTR",
    "HINT_CLASS",
    "ROOT_ATTR",
    "SRC_ATTR",
]
