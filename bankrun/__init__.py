"""Bank-run stress calculator"""

from .history import HistoryBuffer, HistorySample
from .session import CycleOutput, StressSession
from .stress import (
    PRESETS,
    RiskTier,
    StressInputs,
    StressResult,
    StressScorer,
    estimate_duration_loss,
    evaluate,
)

__all__ = [
    "StressInputs",
    "StressResult",
    "StressScorer",
    "RiskTier",
    "PRESETS",
    "evaluate",
    "estimate_duration_loss",
    "HistoryBuffer",
    "HistorySample",
    "StressSession",
    "CycleOutput",
]
