"""Stress scoring modules"""

from .engine import (
    StressScorer,
    classify,
    estimate_duration_loss,
    evaluate,
    interpret,
    normalize,
    score,
)
from .models import NormalizedFactors, RiskTier, StressInputs, StressResult
from .presets import PRESETS, get_preset

__all__ = [
    "StressScorer",
    "StressInputs",
    "StressResult",
    "NormalizedFactors",
    "RiskTier",
    "PRESETS",
    "get_preset",
    "normalize",
    "score",
    "classify",
    "interpret",
    "estimate_duration_loss",
    "evaluate",
]
