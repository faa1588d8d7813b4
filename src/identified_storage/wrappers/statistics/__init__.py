from identified_storage.wrappers.statistics.wrapper import StatisticsWrapper, StorageStatistics

__all__ = ["StatisticsWrapper", "StorageStatistics"]
