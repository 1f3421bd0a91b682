import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from longread.adapters.fs.filestore import FileSystemStore
from longread.components.locked_store import LockedContentStore, LockedStoreConfig
from longread.rules.loader import load_rules
from longread.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("LONGREAD_RULES_PATH", self.base_dir / "rules.yaml"))
        data_dir = os.environ.get("LONGREAD_DATA_DIR")
        self.data_dir = Path(data_dir) if data_dir else None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Stores ---
def get_file_store(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> FileSystemStore:
    output_dir = settings.data_dir or settings.base_dir / rules.locked_store.output_dir
    return FileSystemStore(output_dir)


def get_locked_store(
    store: FileSystemStore = Depends(get_file_store),
    rules: Rules = Depends(get_rules),
) -> LockedContentStore:
    config = LockedStoreConfig(
        path_template=rules.locked_store.path_template,
        public_prefix=rules.locked_store.public_prefix,
    )
    return LockedContentStore(store, config)
