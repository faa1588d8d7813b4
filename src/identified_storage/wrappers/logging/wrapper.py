import dataclasses
import json
import logging
from collections.abc import AsyncIterator, Callable, Hashable, Iterable, Mapping
from typing import Any, Literal, TypeVar

from pydantic import BaseModel
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

Status = Literal["start", "finish", "error"]


def _to_jsonable(value: Any) -> Any:  # pyright: ignore[reportAny]
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}

    if isinstance(value, IdentifiedArray):
        return list(value)  # pyright: ignore[reportUnknownArgumentType]

    if isinstance(value, Mapping):
        return dict(value)  # pyright: ignore[reportUnknownArgumentType]

    if callable(value):
        return getattr(value, "__qualname__", repr(value))

    return repr(value)  # pyright: ignore[reportAny]


class LoggingWrapper(BaseWrapper[ID, E]):
    """Wrapper that logs the start, finish and failure of every storage operation.

    Example:
        storage = LoggingWrapper(storage=IdentifiedStorage(todos), log_level=logging.DEBUG)

        await storage.fetch_one("a")
        # Start FETCH_ONE id='a'
        # Finish FETCH_ONE id='a' value=Todo(id='a', ...) ({'hit': True})
    """

    def __init__(
        self,
        storage: IdentifiedStorageProtocol[ID, E],
        logger: logging.Logger | None = None,
        log_level: int = logging.INFO,
        structured_logs: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Initialize the logging wrapper.

        Args:
            storage: The storage to wrap.
            logger: The logger to use. Defaults to the logger of this module.
            log_level: The level for start and finish messages. Failures are logged at ERROR. Defaults to INFO.
            structured_logs: Log each message as a JSON object instead of plain text. Defaults to False.
        """
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.log_level: int = log_level
        self.structured_logs: bool = structured_logs

        super().__init__(storage=storage)

    def _format_message(
        self,
        status: Status,
        action: str,
        id: Any | None = None,  # noqa: A002
        value: Any | None = None,
        extra: dict[str, Any] | None = None,
    ) -> str:
        if self.structured_logs:
            fields: dict[str, Any] = {"status": status, "action": action}
            if id is not None:
                fields["id"] = id
            if value is not None:
                fields["value"] = value
            if extra:
                fields["extra"] = extra
            return json.dumps(fields, default=_to_jsonable)

        message = f"{status.capitalize()} {action}"
        if id is not None:
            message += f" id='{id}'"
        if value is not None:
            message += f" value={value!r}"
        if extra:
            message += f" ({extra})"
        return message

    def _log(
        self,
        status: Status,
        action: str,
        id: Any | None = None,  # noqa: A002
        value: Any | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        level = logging.ERROR if status == "error" else self.log_level
        self.logger.log(level, self._format_message(status=status, action=action, id=id, value=value, extra=extra))

    def _log_error(self, action: str, error: Exception, id: Any | None = None) -> None:  # noqa: A002
        self._log(status="error", action=action, id=id, extra={"error": type(error).__name__, "message": str(error)})

    @override
    async def delete(self, id: ID | None = None, *, where: Callable[[E], bool] | None = None) -> None:  # noqa: A002
        action = "DELETE_WHERE" if where is not None else "DELETE"
        self._log(status="start", action=action, id=id)

        try:
            await super().delete(id=id, where=where)
        except Exception as e:
            self._log_error(action=action, error=e, id=id)
            raise

        self._log(status="finish", action=action, id=id)

    @override
    async def insert(self, element: E | None = None, *, request: InsertRequestConvertible[E] | None = None) -> E:
        extra = {"request": request} if request is not None else None
        self._log(status="start", action="INSERT", value=element, extra=extra)

        try:
            inserted = await super().insert(element=element, request=request)
        except Exception as e:
            self._log_error(action="INSERT", error=e)
            raise

        self._log(status="finish", action="INSERT", value=inserted)

        return inserted

    @override
    async def fetch(self, request: FetchRequestConvertible[ID, E] | None = None) -> IdentifiedArray[ID, E]:
        extra = {"request": request} if request is not None else None
        self._log(status="start", action="FETCH", extra=extra)

        try:
            values = await super().fetch(request=request)
        except Exception as e:
            self._log_error(action="FETCH", error=e)
            raise

        self._log(status="finish", action="FETCH", extra={"count": len(values)})

        return values

    @override
    async def fetch_one(
        self,
        id: ID | None = None,  # noqa: A002
        *,
        request: FetchOneRequestConvertible[ID, E] | None = None,
    ) -> E | None:
        extra = {"request": request} if request is not None else None
        self._log(status="start", action="FETCH_ONE", id=id, extra=extra)

        try:
            element = await super().fetch_one(id=id, request=request)
        except Exception as e:
            self._log_error(action="FETCH_ONE", error=e, id=id)
            raise

        self._log(status="finish", action="FETCH_ONE", id=id, value=element, extra={"hit": element is not None})

        return element

    @override
    async def set(self, elements: Iterable[E]) -> IdentifiedArray[ID, E]:
        self._log(status="start", action="SET")

        try:
            values = await super().set(elements=elements)
        except Exception as e:
            self._log_error(action="SET", error=e)
            raise

        self._log(status="finish", action="SET", extra={"count": len(values)})

        return values

    @override
    def stream(self, request: FetchRequestConvertible[ID, E] | None = None) -> AsyncIterator[E]:
        extra = {"request": request} if request is not None else None
        self._log(status="start", action="STREAM", extra=extra)

        return self._stream(super().stream(request=request))

    async def _stream(self, elements: AsyncIterator[E]) -> AsyncIterator[E]:
        count = 0

        try:
            async for element in elements:
                count += 1
                yield element
        except Exception as e:
            self._log_error(action="STREAM", error=e)
            raise

        self._log(status="finish", action="STREAM", extra={"count": count})

    @override
    async def update(
        self,
        element: E | None = None,
        *,
        id: ID | None = None,  # noqa: A002
        request: UpdateRequestConvertible[E] | None = None,
    ) -> E:
        extra = {"request": request} if request is not None else None
        self._log(status="start", action="UPDATE", id=id, value=element, extra=extra)

        try:
            updated = await super().update(element=element, id=id, request=request)
        except Exception as e:
            self._log_error(action="UPDATE", error=e, id=id)
            raise

        self._log(status="finish", action="UPDATE", id=id, value=updated)

        return updated

    @override
    async def with_values(self, perform: Perform[ID, E, R]) -> R:
        self._log(status="start", action="WITH_VALUES")

        try:
            response = await super().with_values(perform=perform)
        except Exception as e:
            self._log_error(action="WITH_VALUES", error=e)
            raise

        self._log(status="finish", action="WITH_VALUES")

        return response
