from collections.abc import AsyncIterator, Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import TypeVar

from typing_extensions import override

from identified_storage.conversions import (
    FetchOneRequestConvertible,
    FetchRequestConvertible,
    InsertRequestConvertible,
    UpdateRequestConvertible,
)
from identified_storage.errors import ElementExistsError, ElementNotFoundError
from identified_storage.identified_array import IdentifiedArray
from identified_storage.protocols import IdentifiedStorageProtocol, Perform
from identified_storage.wrappers.base import BaseWrapper

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")
R = TypeVar("R")


@dataclass
class BaseStatistics:
    """Base statistics container with operation counting."""

    count: int = field(default=0)
    """The number of operations."""

    def increment(self) -> None:
        self.count += 1


@dataclass
class BaseHitMissStatistics(BaseStatistics):
    """Statistics container with hit/miss tracking."""

    hit: int = field(default=0)
    """The number of operations that found their element."""
    miss: int = field(default=0)
    """The number of operations that did not find their element."""

    def increment_hit(self) -> None:
        self.increment()
        self.hit += 1

    def increment_miss(self) -> None:
        self.increment()
        self.miss += 1


@dataclass
class BaseElementsStatistics(BaseStatistics):
    """Statistics container tracking how many elements were returned."""

    elements: int = field(default=0)
    """The total number of elements returned."""

    def increment_elements(self, elements: int) -> None:
        self.increment()
        self.elements += elements


@dataclass
class DeleteStatistics(BaseStatistics):
    """Statistics about delete operations."""


@dataclass
class InsertStatistics(BaseStatistics):
    """Statistics about insert operations."""

    exists: int = field(default=0)
    """The number of inserts rejected because the id already existed."""


@dataclass
class FetchStatistics(BaseElementsStatistics):
    """Statistics about fetch operations."""


@dataclass
class FetchOneStatistics(BaseHitMissStatistics):
    """Statistics about fetch one operations."""


@dataclass
class SetStatistics(BaseStatistics):
    """Statistics about set operations."""


@dataclass
class StreamStatistics(BaseElementsStatistics):
    """Statistics about completed streams."""


@dataclass
class UpdateStatistics(BaseHitMissStatistics):
    """Statistics about update operations."""


@dataclass
class WithValuesStatistics(BaseStatistics):
    """Statistics about with values operations."""


@dataclass
class StorageStatistics:
    """Statistics container for an IdentifiedStorage."""

    delete: DeleteStatistics = field(default_factory=DeleteStatistics)
    insert: InsertStatistics = field(default_factory=InsertStatistics)
    fetch: FetchStatistics = field(default_factory=FetchStatistics)
    fetch_one: FetchOneStatistics = field(default_factory=FetchOneStatistics)
    set: SetStatistics = field(default_factory=SetStatistics)
    stream: StreamStatistics = field(default_factory=StreamStatistics)
    update: UpdateStatistics = field(default_factory=UpdateStatistics)
    with_values: WithValuesStatistics = field(default_factory=WithValuesStatistics)


class StatisticsWrapper(BaseWrapper[ID, E]):
    """Statistics wrapper around an IdentifiedStorage that tracks operation statistics.

    Failed operations are not counted, except inserts rejected for an existing id
    and updates of a missing id, which count as `exists` and `miss`.
    """

    def __init__(self, storage: IdentifiedStorageProtocol[ID, E]) -> None:
        self._statistics: StorageStatistics = StorageStatistics()

        super().__init__(storage=storage)

    @property
    def statistics(self) -> StorageStatistics:
        return self._statistics

    @override
    async def delete(self, id: ID | None = None, *, where: Callable[[E], bool] | None = None) -> None:  # noqa: A002
        await super().delete(id=id, where=where)

        self.statistics.delete.increment()

    @override
    async def insert(self, element: E | None = None, *, request: InsertRequestConvertible[E] | None = None) -> E:
        try:
            inserted = await super().insert(element=element, request=request)
        except ElementExistsError:
            self.statistics.insert.increment()
            self.statistics.insert.exists += 1
            raise

        self.statistics.insert.increment()

        return inserted

    @override
    async def fetch(self, request: FetchRequestConvertible[ID, E] | None = None) -> IdentifiedArray[ID, E]:
        values = await super().fetch(request=request)

        self.statistics.fetch.increment_elements(len(values))

        return values

    @override
    async def fetch_one(
        self,
        id: ID | None = None,  # noqa: A002
        *,
        request: FetchOneRequestConvertible[ID, E] | None = None,
    ) -> E | None:
        if (element := await super().fetch_one(id=id, request=request)) is not None:
            self.statistics.fetch_one.increment_hit()
            return element

        self.statistics.fetch_one.increment_miss()

        return None

    @override
    async def set(self, elements: Iterable[E]) -> IdentifiedArray[ID, E]:
        values = await super().set(elements=elements)

        self.statistics.set.increment()

        return values

    @override
    def stream(self, request: FetchRequestConvertible[ID, E] | None = None) -> AsyncIterator[E]:
        return self._stream(super().stream(request=request))

    async def _stream(self, elements: AsyncIterator[E]) -> AsyncIterator[E]:
        count = 0

        async for element in elements:
            count += 1
            yield element

        self.statistics.stream.increment_elements(count)

    @override
    async def update(
        self,
        element: E | None = None,
        *,
        id: ID | None = None,  # noqa: A002
        request: UpdateRequestConvertible[E] | None = None,
    ) -> E:
        try:
            updated = await super().update(element=element, id=id, request=request)
        except ElementNotFoundError:
            self.statistics.update.increment_miss()
            raise

        self.statistics.update.increment_hit()

        return updated

    @override
    async def with_values(self, perform: Perform[ID, E, R]) -> R:
        response = await super().with_values(perform=perform)

        self.statistics.with_values.increment()

        return response
