from collections.abc import Hashable, Sequence
from typing import Any

from identified_storage.errors.base import IdentifiedStorageError


class StorageOperationError(IdentifiedStorageError):
    """Base exception for all storage operation errors."""


class ElementNotFoundError(StorageOperationError):
    """Raised when an operation requires an element that is not in the storage."""

    def __init__(self, id: Hashable, ids: Sequence[Any]):  # noqa: A002
        self.id: Hashable = id
        self.ids: list[Any] = list(ids)
        super().__init__(
            message="An element was required but was not found in the storage.",
            extra_info={"id": str(id), "ids": str(self.ids)},
        )


class ElementExistsError(StorageOperationError):
    """Raised when inserting an element whose id is already in the storage."""

    def __init__(self, id: Hashable):  # noqa: A002
        self.id: Hashable = id
        super().__init__(
            message="An element with the same id already exists in the storage.",
            extra_info={"id": str(id)},
        )


class IdentityChangedError(StorageOperationError):
    """Raised when an update request changes the id of the element it updates."""

    def __init__(self, id: Hashable, new_id: Hashable):  # noqa: A002
        self.id: Hashable = id
        self.new_id: Hashable = new_id
        super().__init__(
            message="An update request must not change the id of the element.",
            extra_info={"id": str(id), "new_id": str(new_id)},
        )
