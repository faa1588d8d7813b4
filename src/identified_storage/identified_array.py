import copy
from collections.abc import Callable, Hashable, Iterable, Iterator
from operator import attrgetter
from typing import Any, Generic, TypeVar, overload

from typing_extensions import Self, override

from identified_storage.errors import ElementExistsError, ElementNotFoundError
from identified_storage.type_checking.bear_spray import bear_enforce

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")

IdKey = Callable[[Any], Any]

default_id_key: IdKey = attrgetter("id")


class IdentifiedArray(Generic[ID, E]):
    """An ordered collection of elements keyed by a unique id.

    Iteration follows insertion order. Replacing an element keeps its position.
    """

    _elements: dict[ID, E]
    _id_key: Callable[[E], ID]

    @bear_enforce
    def __init__(self, elements: Iterable[E] = (), *, id_key: Callable[[E], ID] | None = None) -> None:
        """Build an identified array from unique elements.

        Args:
            elements: The elements in order. Ids must be unique.
            id_key: Function returning the id of an element. Defaults to the `id` attribute.

        Raises:
            ElementExistsError: If two elements share an id.
        """
        self._id_key = id_key or default_id_key
        self._elements = {}

        for element in elements:
            self.append(element)

    @property
    def id_key(self) -> Callable[[E], ID]:
        return self._id_key

    @property
    def ids(self) -> list[ID]:
        return list(self._elements)

    @property
    def first(self) -> E | None:
        return next(iter(self._elements.values()), None)

    @property
    def last(self) -> E | None:
        return next(reversed(self._elements.values()), None)

    def id_of(self, element: E) -> ID:
        return self._id_key(element)

    def get(self, id: ID) -> E | None:  # noqa: A002
        return self._elements.get(id)

    def append(self, element: E) -> E:
        """Append an element, raising ElementExistsError if its id is already present."""
        element_id = self._id_key(element)

        if element_id in self._elements:
            raise ElementExistsError(id=element_id)

        self._elements[element_id] = element

        return element

    def replace(self, element: E) -> E:
        """Replace the element with the same id in place, raising ElementNotFoundError if absent."""
        element_id = self._id_key(element)

        if element_id not in self._elements:
            raise ElementNotFoundError(id=element_id, ids=self.ids)

        self._elements[element_id] = element

        return element

    def remove(self, id: ID) -> E | None:  # noqa: A002
        return self._elements.pop(id, None)

    def remove_all(self, where: Callable[[E], bool]) -> int:
        """Remove every element matching the predicate, returning how many were removed."""
        removed: list[ID] = [element_id for element_id, element in self._elements.items() if where(element)]

        for element_id in removed:
            del self._elements[element_id]

        return len(removed)

    def filter(self, predicate: Callable[[E], bool]) -> Self:
        return self._from_ordered(element for element in self._elements.values() if predicate(element))

    def copy(self, *, deep: bool = False) -> Self:
        if deep:
            return self._from_ordered(copy.deepcopy(list(self._elements.values())))

        return self._from_ordered(self._elements.values())

    def _from_ordered(self, elements: Iterable[E]) -> Self:
        new = type(self).__new__(type(self))
        new._id_key = self._id_key
        new._elements = {self._id_key(element): element for element in elements}
        return new

    def __contains__(self, id: object) -> bool:  # noqa: A002
        return id in self._elements

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._elements.values()))

    def __len__(self) -> int:
        return len(self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    @overload
    def __getitem__(self, index: int) -> E: ...

    @overload
    def __getitem__(self, index: slice) -> list[E]: ...

    def __getitem__(self, index: int | slice) -> E | list[E]:
        return list(self._elements.values())[index]

    @override
    def __eq__(self, other: object) -> bool:
        if isinstance(other, IdentifiedArray):
            return list(self) == list(other)  # pyright: ignore[reportUnknownArgumentType]

        if isinstance(other, list):
            return list(self) == other

        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._elements.values())!r})"
