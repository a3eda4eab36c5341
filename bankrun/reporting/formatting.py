"""Text formatting of inputs and results for display"""

from typing import Dict

from ..stress.models import StressInputs, StressResult


def fmt(value: float, digits: int = 1) -> str:
    """Fixed-point formatting with the given number of decimals"""
    return f"{float(value):.{digits}f}"


def format_input_labels(inputs: StressInputs) -> Dict[str, str]:
    """
    Value labels shown next to each slider

    Returns:
        Dict of field name to display text
    """
    return {
        "rate_shock_pct": fmt(inputs.rate_shock_pct, 2) + "%",
        "uninsured_pct": fmt(inputs.uninsured_pct, 0) + "%",
        "duration_years": fmt(inputs.duration_years, 1),
        "unrealized_loss_pct_cap": fmt(inputs.unrealized_loss_pct_cap, 0) + "%",
        "withdrawal_speed": fmt(inputs.withdrawal_speed, 0),
        "concentration": fmt(inputs.concentration, 0),
    }


def format_score(score: float) -> str:
    return fmt(score, 1)


def format_duration_loss(duration_loss_pct: float) -> str:
    return f"~{fmt(duration_loss_pct, 1)}% price impact"


def format_result(result: StressResult) -> Dict[str, str]:
    """All result text fields for a status panel"""
    return {
        "score": format_score(result.score),
        "status": result.tier.value,
        "duration_loss": format_duration_loss(result.duration_loss_pct),
        "interpretation": result.interpretation,
    }
