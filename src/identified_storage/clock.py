import asyncio
from typing import Protocol, runtime_checkable

from typing_extensions import override


@runtime_checkable
class Clock(Protocol):
    """A clock able to suspend the current task for a duration."""

    async def sleep(self, seconds: float) -> None:
        """Suspend for `seconds`. Cancelling the awaiting task interrupts the sleep."""
        ...


class AsyncioClock(Clock):
    """A clock that sleeps on the running event loop."""

    @override
    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ImmediateClock(Clock):
    """A clock that records requested sleeps and returns without waiting.

    It still yields to the event loop once per sleep so other tasks get to run,
    which keeps task interleaving realistic in tests.
    """

    slept: list[float]

    def __init__(self) -> None:
        self.slept = []

    @property
    def total_slept(self) -> float:
        return sum(self.slept)

    @override
    async def sleep(self, seconds: float) -> None:
        self.slept.append(seconds)
        await asyncio.sleep(0)
