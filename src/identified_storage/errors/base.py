ExtraInfoType = dict[str, str | int | float | bool | None]


class IdentifiedStorageError(Exception):
    """Base exception for all Identified Storage errors."""

    def __init__(self, message: str | None = None, extra_info: ExtraInfoType | None = None):
        message_parts: list[str] = []

        if message:
            message_parts.append(message)

        if extra_info:
            extra_info_str = ";".join(f"{k}: {v}" for k, v in extra_info.items())
            if message:
                extra_info_str = "(" + extra_info_str + ")"

            message_parts.append(extra_info_str)

        self.extra_info: ExtraInfoType = extra_info or {}

        super().__init__(": ".join(message_parts))
