import asyncio
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
from identified_storage.wrappers.base import BaseWrapper

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")
R = TypeVar("R")


class TimeoutWrapper(BaseWrapper[ID, E]):
    """Wrapper that bounds every operation with a timeout.

    Operations that take longer than `timeout` seconds raise `asyncio.TimeoutError`. A write
    that times out during its delay keeps its change, as with any cancelled write. Streams
    apply the timeout to each element.
    """

    def __init__(self, storage: IdentifiedStorageProtocol[ID, E], timeout: float = 5.0) -> None:
        """Initialize the timeout wrapper.

        Args:
            storage: The storage to wrap.
            timeout: The maximum number of seconds an operation may take. Defaults to 5.0.
        """
        self.timeout: float = timeout

        super().__init__(storage=storage)

    @override
    async def delete(self, id: ID | None = None, *, where: Callable[[E], bool] | None = None) -> None:  # noqa: A002
        return await asyncio.wait_for(super().delete(id=id, where=where), timeout=self.timeout)

    @override
    async def insert(self, element: E | None = None, *, request: InsertRequestConvertible[E] | None = None) -> E:
        return await asyncio.wait_for(super().insert(element=element, request=request), timeout=self.timeout)

    @override
    async def fetch(self, request: FetchRequestConvertible[ID, E] | None = None) -> IdentifiedArray[ID, E]:
        return await asyncio.wait_for(super().fetch(request=request), timeout=self.timeout)

    @override
    async def fetch_one(
        self,
        id: ID | None = None,  # noqa: A002
        *,
        request: FetchOneRequestConvertible[ID, E] | None = None,
    ) -> E | None:
        return await asyncio.wait_for(super().fetch_one(id=id, request=request), timeout=self.timeout)

    @override
    async def set(self, elements: Iterable[E]) -> IdentifiedArray[ID, E]:
        return await asyncio.wait_for(super().set(elements=elements), timeout=self.timeout)

    @override
    def stream(self, request: FetchRequestConvertible[ID, E] | None = None) -> AsyncIterator[E]:
        return self._stream(super().stream(request=request))

    async def _stream(self, elements: AsyncIterator[E]) -> AsyncIterator[E]:
        while True:
            try:
                element = await asyncio.wait_for(elements.__anext__(), timeout=self.timeout)
            except StopAsyncIteration:
                return
            yield element

    @override
    async def update(
        self,
        element: E | None = None,
        *,
        id: ID | None = None,  # noqa: A002
        request: UpdateRequestConvertible[E] | None = None,
    ) -> E:
        return await asyncio.wait_for(super().update(element=element, id=id, request=request), timeout=self.timeout)

    @override
    async def with_values(self, perform: Perform[ID, E, R]) -> R:
        return await asyncio.wait_for(super().with_values(perform=perform), timeout=self.timeout)
