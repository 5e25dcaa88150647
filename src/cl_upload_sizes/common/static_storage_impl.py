from __future__ import annotations

from pathlib import Path
from typing_extensions import override

import aiofiles
import aiofiles.os

from .errors import StorageError
from .static_storage import StaticStorage


class LocalStaticStorage(StaticStorage):
    """Local filesystem implementation of StaticStorage."""

    @override
    async def exists(self, path: Path) -> bool:
        return await aiofiles.os.path.isfile(path)

    @override
    async def delete(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except OSError as exc:
            raise StorageError(path, "delete") from exc

    @override
    async def write(self, path: Path, data: bytes) -> None:
        try:
            await aiofiles.os.makedirs(path.parent, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                _ = await f.write(data)
        except OSError as exc:
            raise StorageError(path, "write") from exc
