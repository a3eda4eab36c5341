"""Score history modules"""

from .buffer import DEFAULT_CAPACITY, HistoryBuffer, HistorySample

__all__ = ["HistoryBuffer", "HistorySample", "DEFAULT_CAPACITY"]
