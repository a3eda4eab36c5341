"""Settings loading (YAML file + environment overrides) and logging setup"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"

ENV_HISTORY_CAPACITY = "BANKRUN_HISTORY_CAPACITY"
ENV_CHART_DIR = "BANKRUN_CHART_DIR"
ENV_LOG_LEVEL = "BANKRUN_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the calculator"""

    history_capacity: int = 30
    label_format: str = "%H:%M:%S"
    chart_dir: Path = Path("reports") / "charts"
    chart_dpi: int = 100
    log_level: str = "INFO"


def _positive_int(name: str, value) -> int:
    """Accept an int from YAML or a digit string from the environment"""
    if isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}")
    elif isinstance(value, int) and not isinstance(value, bool):
        number = value
    else:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if number < 1:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Load settings from YAML, then apply environment overrides

    Args:
        config_path: YAML file to read (default: config/settings.yaml)

    Returns:
        Settings instance
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    config = {}
    if config_path.exists():
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}
        logger.debug(f"Loaded settings from {config_path}")
    else:
        logger.warning(f"Settings file not found: {config_path}, using defaults")

    defaults = Settings()
    history = config.get("history") or {}
    charts = config.get("charts") or {}
    logging_cfg = config.get("logging") or {}

    load_dotenv()

    capacity = os.getenv(ENV_HISTORY_CAPACITY, history.get("capacity", defaults.history_capacity))
    chart_dir = os.getenv(ENV_CHART_DIR, charts.get("output_dir", defaults.chart_dir))
    log_level = os.getenv(ENV_LOG_LEVEL, logging_cfg.get("level", defaults.log_level))

    log_level = str(log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level: {log_level}")

    return Settings(
        history_capacity=_positive_int("history.capacity", capacity),
        label_format=str(history.get("label_format", defaults.label_format)),
        chart_dir=Path(chart_dir),
        chart_dpi=_positive_int("charts.dpi", charts.get("dpi", defaults.chart_dpi)),
        log_level=log_level,
    )


def configure_logging(level: str = "INFO"):
    """Set up root logging for scripts"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
