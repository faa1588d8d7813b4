from identified_storage.wrappers.base import BaseWrapper
from identified_storage.wrappers.logging import LoggingWrapper
from identified_storage.wrappers.statistics import StatisticsWrapper, StorageStatistics
from identified_storage.wrappers.timeout import TimeoutWrapper

__all__ = [
    "BaseWrapper",
    "LoggingWrapper",
    "StatisticsWrapper",
    "StorageStatistics",
    "TimeoutWrapper",
]
