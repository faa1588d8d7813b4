"""Error classes for identified storage operations.

Exception Hierarchy:
    IdentifiedStorageError (base for all storage errors)
    └── StorageOperationError (operation-level errors)
        ├── ElementNotFoundError
        ├── ElementExistsError
        └── IdentityChangedError
"""

from identified_storage.errors.base import ExtraInfoType, IdentifiedStorageError
from identified_storage.errors.storage import (
    ElementExistsError,
    ElementNotFoundError,
    IdentityChangedError,
    StorageOperationError,
)

__all__ = [
    "ElementExistsError",
    "ElementNotFoundError",
    "ExtraInfoType",
    "IdentifiedStorageError",
    "IdentityChangedError",
    "StorageOperationError",
]
