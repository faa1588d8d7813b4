import asyncio

import pytest
from typing_extensions import override

from identified_storage import AsyncioClock, IdentifiedStorage, StorageDelays
from identified_storage.wrappers.timeout import TimeoutWrapper
from tests.base import BaseStorageTests
from tests.conftest import Todo


@pytest.fixture
def slow_storage(mock_todos: list[Todo]) -> IdentifiedStorage[str, Todo]:
    """A storage that takes a long time to respond."""
    return IdentifiedStorage(mock_todos, delays=StorageDelays.uniform(10), clock=AsyncioClock())


class TestTimeoutWrapper(BaseStorageTests):
    @override
    @pytest.fixture
    async def storage(self, mock_todos: list[Todo]) -> TimeoutWrapper[str, Todo]:
        return TimeoutWrapper(storage=IdentifiedStorage(mock_todos, delays=None), timeout=5.0)

    async def test_timeout_on_fetch(self, slow_storage: IdentifiedStorage[str, Todo]):
        storage = TimeoutWrapper(storage=slow_storage, timeout=0.05)

        with pytest.raises(asyncio.TimeoutError):
            _ = await storage.fetch()

        with pytest.raises(asyncio.TimeoutError):
            _ = await storage.fetch_one("0")

    async def test_timed_out_write_keeps_its_change(self, slow_storage: IdentifiedStorage[str, Todo]):
        storage = TimeoutWrapper(storage=slow_storage, timeout=0.05)

        with pytest.raises(asyncio.TimeoutError):
            _ = await storage.insert(Todo(id="3", description="Read"))

        assert slow_storage.ids() == ["0", "1", "2", "3"]

    async def test_timeout_on_stream_element(self, slow_storage: IdentifiedStorage[str, Todo]):
        storage = TimeoutWrapper(storage=slow_storage, timeout=0.05)

        with pytest.raises(asyncio.TimeoutError):
            _ = [todo async for todo in storage.stream()]

    async def test_no_timeout_without_delay(self, slow_storage: IdentifiedStorage[str, Todo]):
        storage = TimeoutWrapper(storage=slow_storage, timeout=0.05)

        assert await storage.set([Todo(id="a", description="Only")]) == [Todo(id="a", description="Only")]
        assert await storage.with_values(len) == 1

    async def test_no_timeout_within_limit(self, mock_todos: list[Todo]):
        storage = TimeoutWrapper(
            storage=IdentifiedStorage(mock_todos, delays=StorageDelays.uniform(0.01), clock=AsyncioClock()),
            timeout=1.0,
        )

        assert len(await storage.fetch()) == 3
