"""
Locked store component ports.

External interfaces for artifact persistence.
"""

from __future__ import annotations

from typing import Protocol


class FileStorePort(Protocol):
    """
    Port for byte storage addressed by relative path.

    Implementations:
    - FileSystemStore: files under a base directory (build output)
    """

    def save(self, name: str, data: bytes) -> str:
        """
        Write bytes, replacing any existing file.

        Args:
            name: Path relative to the store root

        Returns:
            The stored path, relative to the store root
        """
        ...

    def get(self, path: str) -> bytes:
        """Read bytes. Raises FileNotFoundError."""
        ...
