import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

import pytest
from pydantic import BaseModel

from identified_storage import IdentifiedArray, IdentifiedStorage, ImmediateClock, StorageDelays


class Todo(BaseModel):
    id: str
    description: str
    is_complete: bool = True


class TodoFilter(Enum):
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class TodoFetchRequest:
    filter: TodoFilter | None = None

    def fetch(self, values: IdentifiedArray[str, Todo]) -> IdentifiedArray[str, Todo]:
        if self.filter is None:
            return values
        return values.filter(lambda todo: todo.is_complete == (self.filter is TodoFilter.COMPLETE))


class TodoFetchOneRequest(Enum):
    FIRST = "first"
    LAST = "last"

    def fetch_one(self, values: IdentifiedArray[str, Todo]) -> Todo | None:
        return values.first if self is TodoFetchOneRequest.FIRST else values.last


class IncrementingIds:
    """Generates the ids "0", "1", "2", ... in order."""

    def __init__(self) -> None:
        self._counter = itertools.count()

    def __call__(self) -> str:
        return str(next(self._counter))


@dataclass(frozen=True)
class TodoInsertRequest:
    description: str
    id_factory: Callable[[], str] = field(default=lambda: uuid4().hex)

    def transform(self) -> Todo:
        return Todo(id=self.id_factory(), description=self.description)


@dataclass(frozen=True)
class TodoUpdateRequest:
    description: str

    def apply(self, element: Todo) -> None:
        element.description = self.description


MOCK_TODOS: list[Todo] = [
    Todo(id="0", description="Buy milk"),
    Todo(id="1", description="Pickup blob from school."),
    Todo(id="2", description="Walk the dog.", is_complete=False),
]


@pytest.fixture
def mock_todos() -> list[Todo]:
    return [todo.model_copy() for todo in MOCK_TODOS]


@pytest.fixture
def clock() -> ImmediateClock:
    return ImmediateClock()


@pytest.fixture
def delays() -> StorageDelays:
    return StorageDelays(delete=1, fetch=2, insert=3, update=4)


@pytest.fixture
def identified_storage(mock_todos: list[Todo], delays: StorageDelays, clock: ImmediateClock) -> IdentifiedStorage[str, Todo]:
    return IdentifiedStorage(mock_todos, delays=delays, clock=clock)
