"""
Stress Scoring Engine - Turns balance-sheet inputs into a 0-100 stress score
"""

import math
from typing import Dict, Mapping

import pandas as pd

from .models import (
    FACTOR_LABELS,
    FACTOR_NAMES,
    FIELD_CEILINGS,
    NormalizedFactors,
    RiskTier,
    StressInputs,
    StressResult,
    clamp,
    require_real,
)


# Tier lower bounds (inclusive)
AT_RISK_THRESHOLD = 40.0
CRITICAL_THRESHOLD = 70.0

INTERPRETATIONS = {
    RiskTier.STABLE: (
        "Balance-sheet and run dynamics appear resilient in this simplified scenario. "
        "Stress factors do not compound fast enough to trigger a run."
    ),
    RiskTier.AT_RISK: (
        "Multiple risk factors are present. A confidence shock or faster withdrawals "
        "could push the bank into a self-reinforcing liquidity spiral."
    ),
    RiskTier.CRITICAL: (
        "Conditions resemble high fragility: rate sensitivity + deposit flight dynamics "
        "can accelerate rapidly. Liquidity pressure would likely dominate decision-making."
    ),
}


def normalize(inputs: StressInputs) -> NormalizedFactors:
    """
    Scale each input by its natural-range ceiling and clamp to [0, 1]

    Args:
        inputs: Raw slider values

    Returns:
        NormalizedFactors
    """
    return NormalizedFactors(
        **{
            FACTOR_NAMES[name]: clamp(0.0, 1.0, getattr(inputs, name) / ceiling)
            for name, ceiling in FIELD_CEILINGS.items()
        }
    )


def classify(score: float) -> RiskTier:
    """
    Map a stress score onto its tier

    Bands are inclusive-low: 40 is At Risk, 70 is Critical.
    """
    if score < AT_RISK_THRESHOLD:
        return RiskTier.STABLE
    elif score < CRITICAL_THRESHOLD:
        return RiskTier.AT_RISK
    else:
        return RiskTier.CRITICAL


def interpret(tier: RiskTier) -> str:
    """Canned explanation for a tier"""
    return INTERPRETATIONS[tier]


def estimate_duration_loss(duration_years: float, rate_shock_pct: float) -> float:
    """
    Very simplified bond price sensitivity approximation

    Duration x rate change, e.g. 6 years at +2% is roughly a 12% price drop.
    Reported alongside the stress score, never folded into it.

    Args:
        duration_years: Weighted-average asset duration
        rate_shock_pct: Rate shock in percentage points

    Returns:
        Estimated price loss in percent (0-100)

    Raises:
        TypeError: If either argument is not a real number
    """
    duration_years = require_real("duration_years", duration_years)
    rate_shock_pct = require_real("rate_shock_pct", rate_shock_pct)
    return clamp(0.0, 100.0, duration_years * rate_shock_pct)


class StressScorer:
    """Weighted linear stress score (0-100, higher = more fragile)"""

    # Uninsured deposits, withdrawal speed and duration/rate sensitivity
    # are the main run accelerants
    DEFAULT_WEIGHTS = {
        "rate_shock": 18.0,
        "uninsured": 22.0,
        "duration": 15.0,
        "losses": 18.0,
        "withdrawal": 17.0,
        "concentration": 10.0,
    }

    def __init__(self, weights: Dict[str, float] = None):
        """
        Initialize stress scorer

        Args:
            weights: Custom weight per factor (optional, must sum to 100)
        """
        self.weights = dict(self.DEFAULT_WEIGHTS if weights is None else weights)

        if set(self.weights) != set(self.DEFAULT_WEIGHTS):
            raise ValueError(
                f"Weights must cover exactly {sorted(self.DEFAULT_WEIGHTS)}, "
                f"got {sorted(self.weights)}"
            )

        non_finite = [k for k, v in self.weights.items() if not math.isfinite(v)]
        if non_finite:
            raise ValueError(f"Weights must be finite, got {non_finite}")

        negative = [k for k, v in self.weights.items() if v < 0]
        if negative:
            raise ValueError(f"Weights must be non-negative, got negative {negative}")

        # Keeps the weighted sum of [0, 1] factors inside [0, 100]
        weight_sum = sum(self.weights.values())
        if abs(weight_sum - 100.0) > 1e-9:
            raise ValueError(f"Weights must sum to 100, got {weight_sum}")

    def score(self, inputs: StressInputs) -> float:
        """
        Calculate the stress score

        Args:
            inputs: Raw slider values

        Returns:
            Stress score in [0, 100]
        """
        factors = normalize(inputs).as_dict()
        raw = sum(self.weights[name] * value for name, value in factors.items())
        return clamp(0.0, 100.0, raw)

    def evaluate(self, inputs: StressInputs) -> StressResult:
        """
        Run one full evaluation

        Args:
            inputs: Raw slider values

        Returns:
            StressResult with score, tier, interpretation and duration loss
        """
        factors = normalize(inputs)
        score = self.score(inputs)
        tier = classify(score)

        return StressResult(
            score=score,
            tier=tier,
            interpretation=interpret(tier),
            duration_loss_pct=estimate_duration_loss(
                inputs.duration_years, inputs.rate_shock_pct
            ),
            factors=factors,
            weights=dict(self.weights),
        )

    def run_presets(self, presets: Mapping[str, StressInputs]) -> pd.DataFrame:
        """
        Evaluate a set of named scenarios side by side

        Args:
            presets: Mapping of scenario name to inputs

        Returns:
            DataFrame with one row per scenario
        """
        rows = []

        for name, inputs in presets.items():
            result = self.evaluate(inputs)
            row = {
                "preset": name,
                "score": result.score,
                "tier": result.tier.value,
                "duration_loss_pct": result.duration_loss_pct,
            }
            row.update(result.factors.as_dict())
            rows.append(row)

        return pd.DataFrame(rows)

    def generate_report(self, inputs: StressInputs) -> str:
        """
        Generate stress score report

        Returns:
            Formatted string with score, factor breakdown and interpretation
        """
        result = self.evaluate(inputs)
        factors = result.factors.as_dict()

        report = f"""
=== Stress Score Report ===

--- Composite Stress Score ---
Overall Score: {result.score:.1f} / 100
Status: {result.tier.value}
Duration Loss Estimate: ~{result.duration_loss_pct:.1f}% price impact

--- Factor Breakdown ---
"""

        for name, contribution in result.contributions().items():
            report += (
                f"{FACTOR_LABELS[name]}: {factors[name]:.2f} normalized "
                f"(weight: {self.weights[name]:.0f}, contributes {contribution:.1f})\n"
            )

        report += f"""
--- Status Guidelines ---
Stable (0-{AT_RISK_THRESHOLD:.0f}): Resilient, no run dynamics
At Risk ({AT_RISK_THRESHOLD:.0f}-{CRITICAL_THRESHOLD:.0f}): Vulnerable to a confidence shock
Critical ({CRITICAL_THRESHOLD:.0f}-100): High fragility, liquidity pressure dominates

--- Interpretation ---
{result.interpretation}
"""

        # Highlight the biggest driver
        top_name, top_value = max(factors.items(), key=lambda x: x[1])
        if top_value > 0.6:
            report += f"\nTop driver: {FACTOR_LABELS[top_name]} ({top_value:.2f} normalized)\n"

        return report


_default_scorer = StressScorer()


def score(inputs: StressInputs) -> float:
    """Stress score in [0, 100] using the default weights"""
    return _default_scorer.score(inputs)


def evaluate(inputs: StressInputs) -> StressResult:
    """Full evaluation using the default weights"""
    return _default_scorer.evaluate(inputs)
