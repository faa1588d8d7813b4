"""Conversions from caller defined requests to storage behavior.

A storage never inspects the shape of a request. Callers pass any value that
implements one of the protocols below, typically a small frozen dataclass or
an enum describing their intent.
"""

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, TypeVar, runtime_checkable

from typing_extensions import Self, override

from identified_storage.identified_array import IdentifiedArray

ID = TypeVar("ID", bound=Hashable)
E = TypeVar("E")
E_co = TypeVar("E_co", covariant=True)


@runtime_checkable
class InsertRequestConvertible(Protocol[E_co]):
    """A custom insert request for an `IdentifiedStorage`."""

    def transform(self) -> E_co:
        """Transform the request into the element to store."""
        ...


@runtime_checkable
class FetchRequestConvertible(Protocol[ID, E]):
    """A custom fetch request for an `IdentifiedStorage`."""

    def fetch(self, values: IdentifiedArray[ID, E]) -> IdentifiedArray[ID, E]:
        """Return the elements matching the request, keeping the order of `values`."""
        ...


@runtime_checkable
class FetchOneRequestConvertible(Protocol[ID, E]):
    """A custom fetch one request for an `IdentifiedStorage`."""

    def fetch_one(self, values: IdentifiedArray[ID, E]) -> E | None:
        """Return the element matching the request, if there is one."""
        ...


@runtime_checkable
class UpdateRequestConvertible(Protocol[E]):
    """A custom update request for an `IdentifiedStorage`."""

    def apply(self, element: E) -> E | None:
        """Apply the update to a copy of the stored element.

        Either mutate `element` in place and return None, or return the replacement element.
        The id of the element must not change.
        """
        ...


@dataclass(frozen=True)
class FetchAll(FetchRequestConvertible[ID, E]):
    """Fetch every element."""

    @override
    def fetch(self, values: IdentifiedArray[ID, E]) -> IdentifiedArray[ID, E]:
        return values.copy()


@dataclass(frozen=True)
class FetchWhere(FetchRequestConvertible[ID, E]):
    """Fetch the elements matching a predicate."""

    predicate: Callable[[E], bool]

    @classmethod
    def attribute(cls, name: str, value: bool = True) -> Self:  # noqa: FBT001, FBT002
        """Fetch the elements whose boolean attribute `name` equals `value`."""
        return cls(predicate=lambda element: bool(getattr(element, name)) is value)

    @override
    def fetch(self, values: IdentifiedArray[ID, E]) -> IdentifiedArray[ID, E]:
        return values.filter(self.predicate)


@dataclass(frozen=True)
class FetchFirst(FetchOneRequestConvertible[ID, E]):
    """Fetch the first element."""

    @override
    def fetch_one(self, values: IdentifiedArray[ID, E]) -> E | None:
        return values.first


@dataclass(frozen=True)
class FetchLast(FetchOneRequestConvertible[ID, E]):
    """Fetch the last element."""

    @override
    def fetch_one(self, values: IdentifiedArray[ID, E]) -> E | None:
        return values.last


@dataclass(frozen=True)
class FetchOneWhere(FetchOneRequestConvertible[ID, E]):
    """Fetch the first element matching a predicate."""

    predicate: Callable[[E], bool]

    @override
    def fetch_one(self, values: IdentifiedArray[ID, E]) -> E | None:
        return next((element for element in values if self.predicate(element)), None)


@dataclass(frozen=True)
class InsertValue(InsertRequestConvertible[E_co]):
    """Insert an already built element through the request path."""

    element: E_co

    @override
    def transform(self) -> E_co:
        return self.element


@dataclass(frozen=True)
class UpdateFields(UpdateRequestConvertible[E]):
    """Set attributes on the stored element."""

    changes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def of(cls, **changes: Any) -> Self:  # pyright: ignore[reportAny]
        return cls(changes=MappingProxyType(changes))

    @override
    def apply(self, element: E) -> None:
        for name, value in self.changes.items():  # pyright: ignore[reportAny]
            setattr(element, name, value)
