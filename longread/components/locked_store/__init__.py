"""
Locked store component - Locked content artifacts.
"""

from ._impl import LockedContentStore, parse_artifact, serialize_artifact
from .component import persist, run, run_persist
from .models import (
    DEFAULT_PATH_TEMPLATE,
    ArticleKey,
    LockedBlockPayload,
    LockedContentPayload,
    LockedStoreConfig,
    PersistInput,
    PersistOutput,
)
from .ports import FileStorePort

__all__ = [
    # Entry points
    "persist",
    "run",
    "run_persist",
    # Input models
    "ArticleKey",
    "PersistInput",
    # Output models
    "PersistOutput",
    # Wire schema
    "LockedBlockPayload",
    "LockedContentPayload",
    "parse_artifact",
    "serialize_artifact",
    # Store
    "DEFAULT_PATH_TEMPLATE",
    "FileStorePort",
    "LockedContentStore",
    "LockedStoreConfig",
]
