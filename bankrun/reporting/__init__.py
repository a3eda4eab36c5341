"""Report generation modules"""

from .charts import ChartGenerator
from .formatting import (
    fmt,
    format_duration_loss,
    format_input_labels,
    format_result,
    format_score,
)

__all__ = [
    "ChartGenerator",
    "fmt",
    "format_input_labels",
    "format_score",
    "format_duration_loss",
    "format_result",
]
