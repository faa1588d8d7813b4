from collections.abc import AsyncIterator, Awaitable, Callable, Hashable, Iterable
from typing import Protocol, TypeVar, Union, overload, runtime_checkable

from identified_storage.conversions import (
    FetchOneRequestConvertible,
    FetchRequestConvertible,
    InsertRequestConvertible,
    UpdateRequestConvertible,
)
from identified_storage.identified_array import IdentifiedArray

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")
R = TypeVar("R")

Perform = Callable[[IdentifiedArray[ID, E]], Union[Awaitable[R], R]]  # noqa: UP007


@runtime_checkable
class IdentifiedStorageProtocol(Protocol[ID, E]):
    """A CRUD like interface over uniquely identified elements.

    Implemented by `IdentifiedStorage` and by every wrapper around it.
    """

    @overload
    async def delete(self, id: ID) -> None: ...  # noqa: A002

    @overload
    async def delete(self, *, where: Callable[[E], bool]) -> None: ...

    async def delete(self, id: ID | None = None, *, where: Callable[[E], bool] | None = None) -> None:  # noqa: A002
        """Delete the element with the given id, or every element matching `where`.

        Deleting an id that is not in the storage is not an error.
        """
        ...

    @overload
    async def insert(self, element: E) -> E: ...

    @overload
    async def insert(self, *, request: InsertRequestConvertible[E]) -> E: ...

    async def insert(self, element: E | None = None, *, request: InsertRequestConvertible[E] | None = None) -> E:
        """Insert a new element, raising ElementExistsError if its id is already in the storage."""
        ...

    async def fetch(self, request: FetchRequestConvertible[ID, E] | None = None) -> IdentifiedArray[ID, E]:
        """Fetch all the elements, or the elements for the given request."""
        ...

    @overload
    async def fetch_one(self, id: ID) -> E | None: ...  # noqa: A002

    @overload
    async def fetch_one(self, *, request: FetchOneRequestConvertible[ID, E]) -> E | None: ...

    async def fetch_one(
        self,
        id: ID | None = None,  # noqa: A002
        *,
        request: FetchOneRequestConvertible[ID, E] | None = None,
    ) -> E | None:
        """Fetch an element by id, or the element for the given request, if it exists."""
        ...

    async def set(self, elements: Iterable[E]) -> IdentifiedArray[ID, E]:
        """Replace every element in the storage, returning the new elements."""
        ...

    def stream(self, request: FetchRequestConvertible[ID, E] | None = None) -> AsyncIterator[E]:
        """Stream the elements, or the elements for the given request, one at a time."""
        ...

    @overload
    async def update(self, element: E) -> E: ...

    @overload
    async def update(self, *, id: ID, request: UpdateRequestConvertible[E]) -> E: ...  # noqa: A002

    async def update(
        self,
        element: E | None = None,
        *,
        id: ID | None = None,  # noqa: A002
        request: UpdateRequestConvertible[E] | None = None,
    ) -> E:
        """Update an element, raising ElementNotFoundError if its id is not in the storage."""
        ...

    async def with_values(self, perform: Perform[ID, E, R]) -> R:
        """Build a custom response from a snapshot of the elements."""
        ...
