"""Built-in scenario presets"""

from types import MappingProxyType

from .models import StressInputs


PRESETS = MappingProxyType(
    {
        # SVB-like: long duration book, flighty uninsured deposit base
        "svb": StressInputs(
            rate_shock_pct=2.5,
            uninsured_pct=80,
            duration_years=6.5,
            unrealized_loss_pct_cap=65,
            withdrawal_speed=85,
            concentration=85,
        ),
        "stable": StressInputs(
            rate_shock_pct=1.0,
            uninsured_pct=25,
            duration_years=3.0,
            unrealized_loss_pct_cap=15,
            withdrawal_speed=25,
            concentration=30,
        ),
        "rate_shock": StressInputs(
            rate_shock_pct=4.5,
            uninsured_pct=45,
            duration_years=7.5,
            unrealized_loss_pct_cap=55,
            withdrawal_speed=40,
            concentration=45,
        ),
        "run": StressInputs(
            rate_shock_pct=2.0,
            uninsured_pct=70,
            duration_years=5.5,
            unrealized_loss_pct_cap=35,
            withdrawal_speed=95,
            concentration=90,
        ),
    }
)

# Names used by the browser UI buttons
PRESET_ALIASES = {"rateShock": "rate_shock"}

DEFAULT_PRESET = "svb"


def get_preset(name: str) -> StressInputs:
    """
    Look up a preset by name

    Raises:
        KeyError: If no preset has that name
    """
    key = PRESET_ALIASES.get(name, name)
    if key not in PRESETS:
        raise KeyError(f"Unknown preset '{name}', expected one of {list(PRESETS)}")
    return PRESETS[key]
