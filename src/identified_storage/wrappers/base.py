from collections.abc import AsyncIterator, Callable, Hashable, Iterable
from typing import TypeVar

from typing_extensions import override

from identified_storage.conversions import (
    FetchOneRequestConvertible,
    FetchRequestConvertible,
    InsertRequestConvertible,
    UpdateRequestConvertible,
)
from identified_storage.identified_array import IdentifiedArray
from identified_storage.protocols import IdentifiedStorageProtocol, Perform

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")
R = TypeVar("R")


class BaseWrapper(IdentifiedStorageProtocol[ID, E]):
    """A base wrapper for IdentifiedStorage implementations that passes through to the underlying storage."""

    storage: IdentifiedStorageProtocol[ID, E]

    def __init__(self, storage: IdentifiedStorageProtocol[ID, E]) -> None:
        self.storage = storage

    @override
    async def delete(self, id: ID | None = None, *, where: Callable[[E], bool] | None = None) -> None:  # noqa: A002
        return await self.storage.delete(id=id, where=where)  # pyright: ignore[reportCallIssue, reportArgumentType]

    @override
    async def insert(self, element: E | None = None, *, request: InsertRequestConvertible[E] | None = None) -> E:
        return await self.storage.insert(element=element, request=request)  # pyright: ignore[reportCallIssue, reportArgumentType]

    @override
    async def fetch(self, request: FetchRequestConvertible[ID, E] | None = None) -> IdentifiedArray[ID, E]:
        return await self.storage.fetch(request=request)

    @override
    async def fetch_one(
        self,
        id: ID | None = None,  # noqa: A002
        *,
        request: FetchOneRequestConvertible[ID, E] | None = None,
    ) -> E | None:
        return await self.storage.fetch_one(id=id, request=request)  # pyright: ignore[reportCallIssue, reportArgumentType]

    @override
    async def set(self, elements: Iterable[E]) -> IdentifiedArray[ID, E]:
        return await self.storage.set(elements=elements)

    @override
    def stream(self, request: FetchRequestConvertible[ID, E] | None = None) -> AsyncIterator[E]:
        return self.storage.stream(request=request)

    @override
    async def update(
        self,
        element: E | None = None,
        *,
        id: ID | None = None,  # noqa: A002
        request: UpdateRequestConvertible[E] | None = None,
    ) -> E:
        return await self.storage.update(element=element, id=id, request=request)  # pyright: ignore[reportCallIssue, reportArgumentType]

    @override
    async def with_values(self, perform: Perform[ID, E, R]) -> R:
        return await self.storage.with_values(perform=perform)
