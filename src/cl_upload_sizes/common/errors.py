"""Error hierarchy for upload size generation."""

from __future__ import annotations

from os import PathLike


class UploadSizesError(Exception):
    """Base class for all upload size errors."""


class CodecError(UploadSizesError):
    """The image codec rejected a buffer, a target size or an output format."""


class StorageError(UploadSizesError):
    def __init__(self, path: str | PathLike[str], operation: str):
        self.path: str = str(path)
        self.operation: str = operation
        super().__init__(f"Failed to {operation} '{self.path}'")


class SanitizationError(UploadSizesError):
    """A safe output filename or path could not be derived."""
