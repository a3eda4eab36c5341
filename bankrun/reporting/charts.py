"""Chart generation for the stress time series and driver bars using matplotlib"""

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend
import logging
from pathlib import Path
from typing import Dict

import matplotlib.pyplot as plt
import numpy as np

from ..history import HistoryBuffer
from ..stress.engine import AT_RISK_THRESHOLD, CRITICAL_THRESHOLD
from ..stress.models import FACTOR_LABELS, NormalizedFactors, RiskTier

logger = logging.getLogger(__name__)


class ChartGenerator:
    """Generates matplotlib charts for the stress dashboard"""

    def __init__(self, output_dir: Path, dpi: int = 100):
        """
        Initialize chart generator

        Args:
            output_dir: Directory to save chart images
            dpi: Image resolution
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        plt.style.use("seaborn-v0_8-darkgrid")

        self.fig_width = 10
        self.fig_height = 4
        self.dpi = dpi

    def _save(self, fig, filename: str) -> Path:
        plt.tight_layout()

        output_path = self.output_dir / filename
        fig.savefig(output_path, dpi=self.dpi, bbox_inches="tight", facecolor="white")
        plt.close(fig)

        logger.info(f"Saved chart: {output_path}")
        return output_path

    def generate_stress_timeseries(
        self, history: HistoryBuffer, filename: str = "stress_timeseries.png"
    ) -> Path:
        """
        Generate rolling stress score line chart

        Args:
            history: HistoryBuffer with recent scores
            filename: Output filename

        Returns:
            Path to saved chart
        """
        fig, ax = plt.subplots(figsize=(self.fig_width, self.fig_height), dpi=self.dpi)

        history_df = history.to_dataframe()
        labels = history_df["label"].tolist()
        scores = history_df["score"].values
        x = np.arange(len(scores))

        # Tier bands
        ax.axhspan(0, AT_RISK_THRESHOLD, color=RiskTier.STABLE.color, alpha=0.08)
        ax.axhspan(AT_RISK_THRESHOLD, CRITICAL_THRESHOLD, color=RiskTier.AT_RISK.color, alpha=0.08)
        ax.axhspan(CRITICAL_THRESHOLD, 100, color=RiskTier.CRITICAL.color, alpha=0.08)

        if len(scores) > 0:
            ax.plot(
                x,
                scores,
                "o-",
                linewidth=2,
                markersize=4,
                color="#1976d2",
                label="Stress Score",
                zorder=3,
            )
            ax.set_xticks(x)
            ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
            ax.legend(loc="upper left", framealpha=0.9)

        ax.set_ylim(0, 100)
        ax.set_ylabel("Stress Score", fontsize=12, fontweight="bold")
        ax.set_title("Stress Score History", fontsize=14, fontweight="bold", pad=20)
        ax.grid(True, alpha=0.3)

        return self._save(fig, filename)

    def generate_driver_bars(
        self, factors: NormalizedFactors, filename: str = "stress_drivers.png"
    ) -> Path:
        """
        Generate normalized driver intensity bar chart

        Args:
            factors: Normalized factors from the latest evaluation
            filename: Output filename

        Returns:
            Path to saved chart
        """
        fig, ax = plt.subplots(figsize=(self.fig_width, self.fig_height), dpi=self.dpi)

        names = list(factors.as_dict())
        values = np.array(factors.values())
        labels = [FACTOR_LABELS[name] for name in names]

        bars = ax.bar(labels, values, color="#f57c00", alpha=0.8, edgecolor="black", linewidth=1)

        for bar, value in zip(bars, values):
            ax.text(
                bar.get_x() + bar.get_width() / 2.0,
                bar.get_height(),
                f"{value:.2f}",
                ha="center",
                va="bottom",
                fontsize=10,
                fontweight="bold",
            )

        ax.set_ylim(0, 1)
        ax.set_ylabel("Driver intensity (0-1 normalized)", fontsize=12, fontweight="bold")
        ax.set_title("Stress Drivers", fontsize=14, fontweight="bold", pad=20)
        ax.grid(axis="y", alpha=0.3)

        return self._save(fig, filename)

    def generate_all_charts(
        self, history: HistoryBuffer, factors: NormalizedFactors
    ) -> Dict[str, Path]:
        """
        Generate both dashboard charts

        Returns:
            Dictionary mapping chart names to their file paths
        """
        return {
            "timeseries": self.generate_stress_timeseries(history),
            "drivers": self.generate_driver_bars(factors),
        }
