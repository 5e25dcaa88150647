"""
StaticStorage Protocol - the filesystem operations used to persist resized files.

Design goals:
- Keep the resize core independent of the filesystem
- Allow in-memory or remote implementations in tests and deployments
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class StaticStorage(Protocol):
    """
    Protocol for writing generated files into a static directory.

    Implementations raise StorageError when an operation fails.
    """

    async def exists(self, path: Path) -> bool:
        """Return True if a file exists at path."""
        ...

    async def delete(self, path: Path) -> None:
        """Delete the file at path."""
        ...

    async def write(self, path: Path, data: bytes) -> None:
        """
        Write data to path, replacing any existing content.

        Parent directories are created as needed.
        """
        ...
