"""Bounded rolling history of stress scores for the time-series chart"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


DEFAULT_CAPACITY = 30


@dataclass(frozen=True)
class HistorySample:
    """One point on the stress time series"""

    label: str
    score: float


class HistoryBuffer:
    """Append-only FIFO of the most recent stress scores"""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize history buffer

        Args:
            capacity: Maximum number of samples kept (default: 30)
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"Capacity must be a positive integer, got {capacity!r}")

        self._capacity = capacity
        # deque(maxlen) drops the oldest sample as part of append
        self._samples = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, score: float, label: str) -> HistorySample:
        """
        Add a sample at the end, evicting the oldest one when full

        Args:
            score: Stress score
            label: Display timestamp (not validated, duplicates allowed)

        Returns:
            The appended sample
        """
        sample = HistorySample(label=label, score=score)

        with self._lock:
            if len(self._samples) == self._capacity:
                logger.debug(f"History full, evicting {self._samples[0]}")
            self._samples.append(sample)

        return sample

    def current(self) -> Tuple[HistorySample, ...]:
        """Snapshot of the buffer, oldest first"""
        with self._lock:
            return tuple(self._samples)

    def latest(self) -> Optional[HistorySample]:
        """Most recent sample, or None when empty"""
        with self._lock:
            return self._samples[-1] if self._samples else None

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert history to a DataFrame for charting

        Returns:
            DataFrame with columns label and score, oldest first
        """
        samples = self.current()
        return pd.DataFrame(
            {
                "label": [s.label for s in samples],
                "score": [s.score for s in samples],
            }
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)
