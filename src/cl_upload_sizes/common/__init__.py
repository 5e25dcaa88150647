"""Common module - protocols, schemas, errors, and base classes."""

from .compute_module import ComputeModule, TaskOutput, TaskResult
from .errors import CodecError, SanitizationError, StorageError, UploadSizesError
from .static_storage import StaticStorage
from .static_storage_impl import LocalStaticStorage

__all__ = [
    "CodecError",
    "ComputeModule",
    "LocalStaticStorage",
    "SanitizationError",
    "StaticStorage",
    "StorageError",
    "TaskOutput",
    "TaskResult",
    "UploadSizesError",
]
