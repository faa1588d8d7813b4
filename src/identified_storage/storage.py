import asyncio
import copy
import inspect
from collections.abc import AsyncIterator, Callable, Hashable, Iterable
from typing import TypeVar, overload

from typing_extensions import override

from identified_storage.clock import AsyncioClock, Clock
from identified_storage.conversions import (
    FetchOneRequestConvertible,
    FetchRequestConvertible,
    InsertRequestConvertible,
    UpdateRequestConvertible,
)
from identified_storage.delays import Operation, StorageDelays
from identified_storage.errors import ElementNotFoundError, IdentityChangedError
from identified_storage.identified_array import IdentifiedArray
from identified_storage.protocols import IdentifiedStorageProtocol, Perform
from identified_storage.type_checking.bear_spray import bear_spray

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")
R = TypeVar("R")


class IdentifiedStorage(IdentifiedStorageProtocol[ID, E]):
    """An in-memory storage of uniquely identified elements with a CRUD like interface.

    This is useful for mocking remote data stores for previews or tests. Every operation
    is serialized on a single lock, and operations wait for a configurable delay to mimic
    the round trip to a remote store.

    Writes apply their change before waiting, so cancelling a write during its delay
    keeps the change. Reads wait before reading.

    Elements are copied on the way in and on the way out, so mutating a returned element
    never changes the storage.
    """

    _storage: IdentifiedArray[ID, E]
    _delays: StorageDelays | None
    _clock: Clock
    _lock: asyncio.Lock

    def __init__(
        self,
        initial_values: Iterable[E] = (),
        *,
        id_key: Callable[[E], ID] | None = None,
        delays: StorageDelays | None = StorageDelays.default(),  # noqa: B008
        clock: Clock | None = None,
    ) -> None:
        """Create a new storage with the initial values and time delays.

        Args:
            initial_values: The initial elements, in order. Ids must be unique.
            id_key: Function returning the id of an element. Defaults to the `id` attribute.
            delays: Time delays used by the operations. None disables all delays. Defaults to one second.
            clock: The clock used to wait for the delays. Defaults to the asyncio event loop.
        """
        self._storage = IdentifiedArray(copy.deepcopy(list(initial_values)), id_key=id_key)
        self._delays = delays
        self._clock = clock or AsyncioClock()
        self._lock = asyncio.Lock()

    @property
    def delays(self) -> StorageDelays | None:
        return self._delays

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def id_key(self) -> Callable[[E], ID]:
        return self._storage.id_key

    def ids(self) -> list[ID]:
        """The ids currently in the storage, in order. Does not wait for a delay."""
        return self._storage.ids

    async def _sleep(self, operation: Operation) -> None:
        if self._delays is None:
            return

        await self._clock.sleep(self._delays.for_operation(operation))

    @overload
    async def delete(self, id: ID) -> None: ...  # noqa: A002

    @overload
    async def delete(self, *, where: Callable[[E], bool]) -> None: ...

    @override
    @bear_spray
    async def delete(self, id: ID | None = None, *, where: Callable[[E], bool] | None = None) -> None:  # noqa: A002
        """Delete the element with the given id, or every element for which `where` returns True.

        Deleting an id that is not in the storage is not an error.
        """
        if (id is None) == (where is None):
            msg = "delete() takes exactly one of `id` or `where`."
            raise TypeError(msg)

        async with self._lock:
            if where is not None:
                _ = self._storage.remove_all(where=where)
            else:
                _ = self._storage.remove(id=id)  # pyright: ignore[reportArgumentType]

        await self._sleep("delete")

    @overload
    async def insert(self, element: E) -> E: ...

    @overload
    async def insert(self, *, request: InsertRequestConvertible[E]) -> E: ...

    @override
    @bear_spray
    async def insert(self, element: E | None = None, *, request: InsertRequestConvertible[E] | None = None) -> E:
        """Insert a new element, throwing an error if the element id already exists.

        Raises:
            ElementExistsError: If an element with the same id is already in the storage.
        """
        if (element is None) == (request is None):
            msg = "insert() takes exactly one of `element` or `request`."
            raise TypeError(msg)

        if request is not None:
            element = request.transform()

        async with self._lock:
            stored = self._storage.append(copy.deepcopy(element))  # pyright: ignore[reportArgumentType]

        await self._sleep("insert")

        return copy.deepcopy(stored)

    @override
    async def fetch(self, request: FetchRequestConvertible[ID, E] | None = None) -> IdentifiedArray[ID, E]:
        """Fetch all the elements in the storage, or the elements for the given fetch request."""
        await self._sleep("fetch")

        async with self._lock:
            values = self._storage.copy(deep=True)

        if request is not None:
            values = request.fetch(values)

        return values

    @overload
    async def fetch_one(self, id: ID) -> E | None: ...  # noqa: A002

    @overload
    async def fetch_one(self, *, request: FetchOneRequestConvertible[ID, E]) -> E | None: ...

    @override
    @bear_spray
    async def fetch_one(
        self,
        id: ID | None = None,  # noqa: A002
        *,
        request: FetchOneRequestConvertible[ID, E] | None = None,
    ) -> E | None:
        """Fetch an element by its id, or the element for the given request, if it exists."""
        if (id is None) == (request is None):
            msg = "fetch_one() takes exactly one of `id` or `request`."
            raise TypeError(msg)

        await self._sleep("fetch")

        async with self._lock:
            if request is None:
                return copy.deepcopy(self._storage.get(id=id))  # pyright: ignore[reportArgumentType]

            values = self._storage.copy(deep=True)

        return request.fetch_one(values)

    @override
    async def set(self, elements: Iterable[E]) -> IdentifiedArray[ID, E]:
        """Set new elements in the storage, discarding any existing elements.

        No delay is applied, this is meant for setting up or resetting tests.

        Raises:
            ElementExistsError: If two of the new elements share an id.
        """
        new_storage: IdentifiedArray[ID, E] = IdentifiedArray(copy.deepcopy(list(elements)), id_key=self._storage.id_key)

        async with self._lock:
            self._storage = new_storage

            return new_storage.copy(deep=True)

    @override
    def stream(self, request: FetchRequestConvertible[ID, E] | None = None) -> AsyncIterator[E]:
        """Stream the elements in the storage, or the elements for the given fetch request.

        The elements are captured when `stream` is called, later changes to the storage are
        not reflected. The fetch delay is applied before each element, and once more before
        computing the elements for a request.
        """
        # Locked sections never suspend, so a copy taken here is never partially applied.
        return self._stream(values=self._storage.copy(deep=True), request=request)

    async def _stream(
        self,
        values: IdentifiedArray[ID, E],
        request: FetchRequestConvertible[ID, E] | None,
    ) -> AsyncIterator[E]:
        if request is not None:
            await self._sleep("fetch")
            values = request.fetch(values)

        for element in values:
            await self._sleep("fetch")
            yield element

    @overload
    async def update(self, element: E) -> E: ...

    @overload
    async def update(self, *, id: ID, request: UpdateRequestConvertible[E]) -> E: ...  # noqa: A002

    @override
    @bear_spray
    async def update(
        self,
        element: E | None = None,
        *,
        id: ID | None = None,  # noqa: A002
        request: UpdateRequestConvertible[E] | None = None,
    ) -> E:
        """Update an element in the storage, throwing an error if it does not exist.

        Either pass the whole new `element`, or the `id` of the element and an update `request`.

        Raises:
            ElementNotFoundError: If the id is not in the storage.
            IdentityChangedError: If the update request changed the id of the element.
        """
        if element is not None:
            if id is not None or request is not None:
                msg = "update() takes either `element`, or both `id` and `request`."
                raise TypeError(msg)

            async with self._lock:
                updated = self._storage.replace(copy.deepcopy(element))

        else:
            if id is None or request is None:
                msg = "update() takes either `element`, or both `id` and `request`."
                raise TypeError(msg)

            async with self._lock:
                updated = self._apply_update(id=id, request=request)

        await self._sleep("update")

        return copy.deepcopy(updated)

    def _apply_update(self, id: ID, request: UpdateRequestConvertible[E]) -> E:  # noqa: A002
        if id not in self._storage:
            raise ElementNotFoundError(id=id, ids=self._storage.ids)

        element: E = copy.deepcopy(self._storage.get(id=id))  # pyright: ignore[reportAssignmentType]

        if (replacement := request.apply(element)) is not None:
            element = replacement

        if (new_id := self._storage.id_of(element)) != id:
            raise IdentityChangedError(id=id, new_id=new_id)

        return self._storage.replace(element)

    @override
    async def with_values(self, perform: Perform[ID, E, R]) -> R:
        """Access a snapshot of the values in the storage to build a custom response.

        `perform` may be a plain or an async function. Its exceptions propagate unchanged and
        the storage is never modified.
        """
        async with self._lock:
            values = self._storage.copy(deep=True)

        response = perform(values)

        if inspect.isawaitable(response):
            return await response

        return response
