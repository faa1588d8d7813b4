from datetime import timedelta
from typing import Any, Literal, SupportsFloat

from pydantic import BaseModel, ConfigDict, NonNegativeFloat, field_validator
from typing_extensions import Self

Operation = Literal["delete", "fetch", "insert", "update"]

OPERATIONS: tuple[Operation, ...] = ("delete", "fetch", "insert", "update")

DEFAULT_DELAY_SECONDS = 1.0


class StorageDelays(BaseModel):
    """Time delays, in seconds, used to simulate a remote storage for each kind of operation.

    Durations may be given as seconds or as `timedelta`. Negative durations are rejected.
    """

    model_config = ConfigDict(frozen=True)

    delete: NonNegativeFloat
    """The time delay used for delete operations."""

    fetch: NonNegativeFloat
    """The time delay used for fetch and stream operations."""

    insert: NonNegativeFloat
    """The time delay used for insert operations."""

    update: NonNegativeFloat
    """The time delay used for update operations."""

    @field_validator("delete", "fetch", "insert", "update", mode="before")
    @classmethod
    def _timedelta_to_seconds(cls, value: Any) -> Any:  # pyright: ignore[reportAny]
        if isinstance(value, timedelta):
            return value.total_seconds()
        return value

    @classmethod
    def uniform(cls, duration: SupportsFloat | timedelta) -> Self:
        """Create delays using the same duration for all operations."""
        return cls(delete=duration, fetch=duration, insert=duration, update=duration)  # pyright: ignore[reportArgumentType]

    @classmethod
    def default(cls) -> Self:
        """The default time delays of one second."""
        return cls.uniform(DEFAULT_DELAY_SECONDS)

    def for_operation(self, operation: Operation) -> float:
        return getattr(self, operation)
