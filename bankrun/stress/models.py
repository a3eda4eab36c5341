"""
Stress Model Data Structures - Inputs, normalized factors and results
"""

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from numbers import Real
from typing import Dict, Tuple


# Natural-range ceiling for each input field
FIELD_CEILINGS = {
    "rate_shock_pct": 6.0,
    "uninsured_pct": 100.0,
    "duration_years": 10.0,
    "unrealized_loss_pct_cap": 120.0,
    "withdrawal_speed": 100.0,
    "concentration": 100.0,
}

# Factor name for each input field, in driver-chart order
FACTOR_NAMES = {
    "rate_shock_pct": "rate_shock",
    "uninsured_pct": "uninsured",
    "duration_years": "duration",
    "unrealized_loss_pct_cap": "losses",
    "withdrawal_speed": "withdrawal",
    "concentration": "concentration",
}

FACTOR_LABELS = {
    "rate_shock": "Rate shock",
    "uninsured": "Uninsured",
    "duration": "Duration",
    "losses": "Losses",
    "withdrawal": "Withdrawal",
    "concentration": "Concentration",
}

# camelCase keys used by the browser UI
CAMEL_CASE_KEYS = {
    "rateShockPct": "rate_shock_pct",
    "uninsuredPct": "uninsured_pct",
    "durationYears": "duration_years",
    "unrealizedLossPctCap": "unrealized_loss_pct_cap",
    "withdrawalSpeed": "withdrawal_speed",
    "concentration": "concentration",
}


def clamp(low: float, high: float, value: float) -> float:
    """
    Clamp value into [low, high]

    NaN maps to ``low`` so every caller gets a defined number back.
    """
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def require_real(name: str, value) -> float:
    """
    Check that value is a real number and return it as float

    Raises:
        TypeError: For strings, None, booleans and other non-numbers
    """
    # bool is an int subclass but never a valid slider value
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    return float(value)


@dataclass(frozen=True)
class StressInputs:
    """Snapshot of the six balance-sheet risk inputs"""

    rate_shock_pct: float
    uninsured_pct: float
    duration_years: float
    unrealized_loss_pct_cap: float
    withdrawal_speed: float
    concentration: float

    def __post_init__(self):
        for f in fields(self):
            value = require_real(f.name, getattr(self, f.name))
            object.__setattr__(self, f.name, value)

    @classmethod
    def from_dict(cls, data: Dict) -> "StressInputs":
        """
        Build inputs from a mapping

        Accepts snake_case field names or the camelCase keys of the UI.

        Args:
            data: Mapping with all six fields

        Returns:
            StressInputs instance
        """
        values = {}
        for key, value in data.items():
            name = CAMEL_CASE_KEYS.get(key, key)
            if name not in FIELD_CEILINGS:
                raise ValueError(f"Unknown input field: {key}")
            values[name] = value

        missing = [name for name in FIELD_CEILINGS if name not in values]
        if missing:
            raise ValueError(f"Missing input fields: {missing}")

        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def replace(self, **changes) -> "StressInputs":
        """Return a copy with some fields changed (one slider move)"""
        return replace(self, **changes)


@dataclass(frozen=True)
class NormalizedFactors:
    """Each input divided by its ceiling and clamped to [0, 1]"""

    rate_shock: float
    uninsured: float
    duration: float
    losses: float
    withdrawal: float
    concentration: float

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def values(self) -> Tuple[float, ...]:
        """Factor values in driver-chart order"""
        return tuple(getattr(self, f.name) for f in fields(self))


class RiskTier(Enum):
    """Discrete stress tiers"""

    STABLE = "Stable"
    AT_RISK = "At Risk"
    CRITICAL = "Critical"

    @property
    def color(self) -> str:
        """Display color for the tier"""
        return TIER_COLORS[self]


TIER_COLORS = {
    RiskTier.STABLE: "#388e3c",
    RiskTier.AT_RISK: "#f57c00",
    RiskTier.CRITICAL: "#d32f2f",
}


@dataclass(frozen=True)
class StressResult:
    """Outcome of one stress evaluation"""

    score: float
    tier: RiskTier
    interpretation: str
    duration_loss_pct: float
    factors: NormalizedFactors
    weights: Dict[str, float] = field(default_factory=dict, compare=False)

    def contributions(self) -> Dict[str, float]:
        """Points of score contributed by each factor (weight x factor)"""
        return {
            name: self.weights.get(name, 0.0) * value
            for name, value in self.factors.as_dict().items()
        }

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization"""
        return {
            "score": self.score,
            "tier": self.tier.value,
            "interpretation": self.interpretation,
            "duration_loss_pct": self.duration_loss_pct,
            "factors": self.factors.as_dict(),
        }
