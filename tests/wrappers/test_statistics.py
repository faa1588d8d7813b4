import pytest
from dirty_equals import HasAttributes
from typing_extensions import override

from identified_storage import ElementExistsError, ElementNotFoundError, IdentifiedStorage
from identified_storage.wrappers.statistics import StatisticsWrapper
from tests.base import BaseStorageTests
from tests.conftest import Todo, TodoFetchRequest, TodoFilter


class TestStatisticsWrapper(BaseStorageTests):
    @override
    @pytest.fixture
    async def storage(self, mock_todos: list[Todo]) -> StatisticsWrapper[str, Todo]:
        return StatisticsWrapper(storage=IdentifiedStorage(mock_todos, delays=None))

    async def test_fetch_statistics(self, storage: StatisticsWrapper[str, Todo]):
        _ = await storage.fetch()
        _ = await storage.fetch(request=TodoFetchRequest(filter=TodoFilter.INCOMPLETE))

        assert storage.statistics.fetch == HasAttributes(count=2, elements=4)

    async def test_fetch_one_statistics(self, storage: StatisticsWrapper[str, Todo]):
        _ = await storage.fetch_one("0")
        _ = await storage.fetch_one("9")
        _ = await storage.fetch_one("1")

        assert storage.statistics.fetch_one == HasAttributes(count=3, hit=2, miss=1)

    async def test_insert_statistics(self, storage: StatisticsWrapper[str, Todo]):
        _ = await storage.insert(Todo(id="3", description="Read"))

        with pytest.raises(ElementExistsError):
            _ = await storage.insert(Todo(id="3", description="Read again"))

        assert storage.statistics.insert == HasAttributes(count=2, exists=1)

    async def test_update_statistics(self, storage: StatisticsWrapper[str, Todo]):
        _ = await storage.update(Todo(id="0", description="Buy oat milk"))

        with pytest.raises(ElementNotFoundError):
            _ = await storage.update(Todo(id="9", description="Missing"))

        assert storage.statistics.update == HasAttributes(count=2, hit=1, miss=1)

    async def test_stream_statistics(self, storage: StatisticsWrapper[str, Todo]):
        _ = [todo async for todo in storage.stream()]
        _ = [todo async for todo in storage.stream(request=TodoFetchRequest(filter=TodoFilter.COMPLETE))]

        assert storage.statistics.stream == HasAttributes(count=2, elements=5)

    async def test_other_statistics(self, storage: StatisticsWrapper[str, Todo]):
        await storage.delete("0")
        await storage.delete(where=lambda todo: True)
        _ = await storage.set([])
        _ = await storage.with_values(len)

        assert storage.statistics.delete == HasAttributes(count=2)
        assert storage.statistics.set == HasAttributes(count=1)
        assert storage.statistics.with_values == HasAttributes(count=1)

    async def test_failed_operations_are_not_counted(self, storage: StatisticsWrapper[str, Todo]):
        with pytest.raises(TypeError):
            await storage.delete()  # pyright: ignore[reportCallIssue]

        assert storage.statistics.delete == HasAttributes(count=0)
