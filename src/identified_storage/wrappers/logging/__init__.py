from identified_storage.wrappers.logging.wrapper import LoggingWrapper

__all__ = ["LoggingWrapper"]
