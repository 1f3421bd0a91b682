"""
Paywall override configuration reader.

The file maps "<branch>/<slug>" to {openBlocks, teaserBlocks?}. JSON and
YAML are both accepted (chosen by file suffix). A missing file means no
overrides.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import yaml

from longread.components.segmentation import PaywallOverride

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not math.isnan(value)


def parse_overrides(data: Any) -> dict[str, PaywallOverride]:
    """Build the override table, skipping entries without a numeric openBlocks."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Overrides must be a mapping of '<branch>/<slug>' to settings")

    overrides: dict[str, PaywallOverride] = {}
    for key, entry in data.items():
        if not isinstance(entry, dict) or not _is_number(entry.get("openBlocks")):
            logger.warning("Ignoring paywall override %r: openBlocks is not a number", key)
            continue
        teaser = entry.get("teaserBlocks")
        overrides[str(key)] = PaywallOverride.from_mapping(
            {"openBlocks": entry["openBlocks"], "teaserBlocks": teaser if _is_number(teaser) else None}
        )
    return overrides


def load_overrides(path: str | Path) -> dict[str, PaywallOverride]:
    """
    Read the override file.

    Raises:
        ValueError: the file exists but is not valid JSON/YAML or not a mapping
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No overrides file at %s", path)
        return {}

    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content) if content.strip() else None
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid overrides file {path}: {e}") from e

    return parse_overrides(data)
