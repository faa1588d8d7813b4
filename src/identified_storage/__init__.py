"""Identified Storage - an in-memory CRUD storage of identified elements for tests and previews."""

from identified_storage.clock import AsyncioClock, Clock, ImmediateClock
from identified_storage.conversions import (
    FetchAll,
    FetchFirst,
    FetchLast,
    FetchOneRequestConvertible,
    FetchOneWhere,
    FetchRequestConvertible,
    FetchWhere,
    InsertRequestConvertible,
    InsertValue,
    UpdateFields,
    UpdateRequestConvertible,
)
from identified_storage.delays import DEFAULT_DELAY_SECONDS, Operation, StorageDelays
from identified_storage.errors import (
    ElementExistsError,
    ElementNotFoundError,
    IdentifiedStorageError,
    IdentityChangedError,
    StorageOperationError,
)
from identified_storage.identified_array import IdentifiedArray
from identified_storage.protocols import IdentifiedStorageProtocol
from identified_storage.storage import IdentifiedStorage

__all__ = [
    "DEFAULT_DELAY_SECONDS",
    "AsyncioClock",
    "Clock",
    "ElementExistsError",
    "ElementNotFoundError",
    "FetchAll",
    "FetchFirst",
    "FetchLast",
    "FetchOneRequestConvertible",
    "FetchOneWhere",
    "FetchRequestConvertible",
    "FetchWhere",
    "IdentifiedArray",
    "IdentifiedStorage",
    "IdentifiedStorageError",
    "IdentifiedStorageProtocol",
    "IdentityChangedError",
    "ImmediateClock",
    "InsertRequestConvertible",
    "InsertValue",
    "Operation",
    "StorageDelays",
    "StorageOperationError",
    "UpdateFields",
    "UpdateRequestConvertible",
]
