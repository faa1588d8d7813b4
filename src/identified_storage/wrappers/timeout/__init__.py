from identified_storage.wrappers.timeout.wrapper import TimeoutWrapper

__all__ = ["TimeoutWrapper"]
