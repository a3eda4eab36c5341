"""
Demo script for the bank-run stress calculator

This script demonstrates:
1. Loading settings
2. Applying each built-in preset
3. Scoring, classifying and estimating duration loss
4. Simulating slider moves
5. Saving the history and driver charts

Settings are read from config/settings.yaml and may be overridden
through BANKRUN_* variables in the environment or a .env file.
"""

import sys
from pathlib import Path

from bankrun.config import configure_logging, load_settings
from bankrun.history import HistoryBuffer
from bankrun.reporting import ChartGenerator, format_input_labels, format_result
from bankrun.session import CycleOutput, StressSession
from bankrun.stress import PRESETS, RiskTier, StressScorer


# ANSI color codes for pretty output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


TIER_COLORS = {
    RiskTier.STABLE: Colors.OKGREEN,
    RiskTier.AT_RISK: Colors.WARNING,
    RiskTier.CRITICAL: Colors.FAIL,
}


def print_header(text):
    """Print a colored header"""
    print(f"\n{Colors.HEADER}{Colors.BOLD}{'=' * 60}{Colors.ENDC}")
    print(f"{Colors.HEADER}{Colors.BOLD}{text.center(60)}{Colors.ENDC}")
    print(f"{Colors.HEADER}{Colors.BOLD}{'=' * 60}{Colors.ENDC}\n")


def print_success(text):
    print(f"{Colors.OKGREEN}[OK] {text}{Colors.ENDC}")


def print_info(text):
    print(f"{Colors.OKCYAN}  {text}{Colors.ENDC}")


def print_warning(text):
    print(f"{Colors.WARNING}[WARNING] {text}{Colors.ENDC}")


def print_error(text):
    print(f"{Colors.FAIL}[ERROR] {text}{Colors.ENDC}")


def render_cycle(output: CycleOutput):
    """Print one recompute the way the dashboard panel shows it"""
    text = format_result(output.result)
    color = TIER_COLORS[output.result.tier]

    labels = format_input_labels(output.inputs)
    print_info(
        "Inputs: "
        + ", ".join(f"{name}={value}" for name, value in labels.items())
    )
    print(
        f"{color}{Colors.BOLD}  Score: {text['score']:>5} "
        f"({text['status']}) | Duration loss: {text['duration_loss']}{Colors.ENDC}"
    )
    print_info(text["interpretation"])


def compare_presets(scorer):
    """Show every preset side by side"""
    print_header("Preset Comparison")

    results_df = scorer.run_presets(PRESETS)

    print(f"  {'Preset':<12} {'Score':>6} {'Status':<10} {'Dur. loss':>9}")
    print(f"  {'-'*12} {'-'*6} {'-'*10} {'-'*9}")

    for _, row in results_df.iterrows():
        line = (
            f"  {row['preset']:<12} {row['score']:>6.1f} {row['tier']:<10} "
            f"{row['duration_loss_pct']:>8.1f}%"
        )
        color = TIER_COLORS[RiskTier(row["tier"])]
        print(f"{color}{line}{Colors.ENDC}")

    print()
    return results_df


def main():
    """Main demo function"""
    import argparse

    parser = argparse.ArgumentParser(description="Bank-Run Stress Calculator")
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Only walk through this preset",
    )
    parser.add_argument(
        "--save-charts",
        action="store_true",
        help="Save the history and driver charts as PNG files",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    args = parser.parse_args()

    print(f"\n{Colors.HEADER}{Colors.BOLD}")
    print("╔════════════════════════════════════════════════════════════╗")
    print("║                  Bank-Run Stress Calculator                ║")
    print("║          Transparent heuristic, not a calibrated model     ║")
    print("╚════════════════════════════════════════════════════════════╝")
    print(f"{Colors.ENDC}\n")

    try:
        settings = load_settings(args.config)
        configure_logging(settings.log_level)
        print_success(f"Loaded settings (history capacity: {settings.history_capacity})")

        scorer = StressScorer()
        session = StressSession(
            scorer=scorer,
            history=HistoryBuffer(settings.history_capacity),
            label_format=settings.label_format,
        )
        session.subscribe(render_cycle)

        # Initial load
        print_header("Initial Load")
        session.evaluate_once()

        presets = [args.preset] if args.preset else list(PRESETS)
        for name in presets:
            print_header(f"Preset: {name}")
            output = session.apply_preset(name)
            if output.result.tier is RiskTier.CRITICAL:
                print_warning("Critical stress: run dynamics likely dominate")

        # Slider sweep on withdrawal speed
        print_header("Withdrawal Speed Sweep")
        for speed in (20, 50, 80, 100):
            session.update(withdrawal_speed=speed)

        compare_presets(scorer)

        print(scorer.generate_report(session.inputs))

        if args.save_charts:
            print_header("Saving Charts")
            charts = ChartGenerator(settings.chart_dir, dpi=settings.chart_dpi)
            latest = scorer.evaluate(session.inputs)
            paths = charts.generate_all_charts(session.history, latest.factors)
            for name, path in paths.items():
                print_success(f"{name}: {path}")

    except KeyboardInterrupt:
        print_warning("\n\nDemo interrupted by user")
        sys.exit(0)
    except Exception as e:
        print_error(f"\nDemo failed with error: {e}")
        import traceback

        print("\n" + traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    main()
