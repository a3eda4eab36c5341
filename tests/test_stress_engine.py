"""
Tests for Stress Scoring Engine
"""

import math

import pandas as pd
import pytest

from bankrun.stress.engine import (
    INTERPRETATIONS,
    StressScorer,
    classify,
    estimate_duration_loss,
    evaluate,
    interpret,
    normalize,
    score,
)
from bankrun.stress.models import FIELD_CEILINGS, RiskTier, StressInputs
from bankrun.stress.presets import PRESETS


@pytest.fixture
def zero_inputs():
    """All sliders at zero"""
    return StressInputs(0, 0, 0, 0, 0, 0)


@pytest.fixture
def max_inputs():
    """All sliders at their ceilings"""
    return StressInputs(**FIELD_CEILINGS)


@pytest.fixture
def scorer():
    return StressScorer()


class TestWeights:
    """Test weight table and validation"""

    def test_default_weights_sum_to_100(self):
        assert sum(StressScorer.DEFAULT_WEIGHTS.values()) == 100

    def test_default_weight_values(self, scorer):
        assert scorer.weights == {
            "rate_shock": 18,
            "uninsured": 22,
            "duration": 15,
            "losses": 18,
            "withdrawal": 17,
            "concentration": 10,
        }

    def test_custom_weights(self):
        weights = {
            "rate_shock": 20,
            "uninsured": 20,
            "duration": 20,
            "losses": 20,
            "withdrawal": 10,
            "concentration": 10,
        }
        scorer = StressScorer(weights)

        assert scorer.weights == weights

    def test_weights_not_summing_to_100(self):
        weights = dict(StressScorer.DEFAULT_WEIGHTS, concentration=20)

        with pytest.raises(ValueError, match="sum to 100"):
            StressScorer(weights)

    def test_missing_factor(self):
        weights = dict(StressScorer.DEFAULT_WEIGHTS)
        del weights["concentration"]

        with pytest.raises(ValueError):
            StressScorer(weights)

    def test_negative_weight(self):
        weights = dict(StressScorer.DEFAULT_WEIGHTS, rate_shock=-2, uninsured=42)

        with pytest.raises(ValueError, match="non-negative"):
            StressScorer(weights)

    def test_empty_weights_rejected(self):
        """An empty table is not the same as no table"""
        with pytest.raises(ValueError, match="cover exactly"):
            StressScorer({})

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_weight_rejected(self, bad):
        weights = dict(StressScorer.DEFAULT_WEIGHTS, concentration=bad)

        with pytest.raises(ValueError, match="finite"):
            StressScorer(weights)

    def test_none_uses_defaults(self):
        assert StressScorer(None).weights == StressScorer.DEFAULT_WEIGHTS

    def test_default_weights_not_shared(self, scorer):
        scorer.weights["rate_shock"] = 0

        assert StressScorer.DEFAULT_WEIGHTS["rate_shock"] == 18


class TestNormalize:
    """Test factor normalization"""

    def test_svb_factors(self):
        factors = normalize(PRESETS["svb"])

        assert factors.rate_shock == pytest.approx(0.4167, abs=1e-4)
        assert factors.uninsured == pytest.approx(0.80)
        assert factors.duration == pytest.approx(0.65)
        assert factors.losses == pytest.approx(0.5417, abs=1e-4)
        assert factors.withdrawal == pytest.approx(0.85)
        assert factors.concentration == pytest.approx(0.85)

    def test_clamped_to_unit_interval(self):
        factors = normalize(StressInputs(-1, 250, 11, -50, 100.5, 1e6))

        assert factors.values() == (0.0, 1.0, 1.0, 0.0, 1.0, 1.0)

    def test_values_order(self, max_inputs):
        factors = normalize(max_inputs)

        assert list(factors.as_dict()) == [
            "rate_shock",
            "uninsured",
            "duration",
            "losses",
            "withdrawal",
            "concentration",
        ]
        assert factors.values() == (1.0,) * 6

    def test_nan_treated_as_minimum(self):
        factors = normalize(StressInputs(float("nan"), 50, 5, 60, 50, 50))

        assert factors.rate_shock == 0.0
        assert factors.uninsured == 0.5

    def test_infinities(self):
        factors = normalize(StressInputs(float("inf"), float("-inf"), 5, 60, 50, 50))

        assert factors.rate_shock == 1.0
        assert factors.uninsured == 0.0


class TestScore:
    """Test stress score computation"""

    def test_svb_score(self):
        assert score(PRESETS["svb"]) == pytest.approx(67.55)

    def test_stable_score(self):
        assert score(PRESETS["stable"]) == pytest.approx(22.5)

    def test_rate_shock_score(self):
        assert score(PRESETS["rate_shock"]) == pytest.approx(54.2)

    def test_run_score(self):
        assert score(PRESETS["run"]) == pytest.approx(60.05)

    def test_all_ceilings(self, max_inputs):
        assert score(max_inputs) == 100

    def test_all_zero(self, zero_inputs):
        assert score(zero_inputs) == 0

    def test_range_for_extreme_inputs(self):
        extremes = [-1e12, -1, 0, 1e12, float("inf"), float("-inf"), float("nan")]

        for value in extremes:
            inputs = StressInputs(value, value, value, value, value, value)
            assert 0 <= score(inputs) <= 100
            assert 0 <= evaluate(inputs).duration_loss_pct <= 100

    def test_nan_scores_like_zero(self):
        with_nan = PRESETS["svb"].replace(withdrawal_speed=float("nan"))
        with_zero = PRESETS["svb"].replace(withdrawal_speed=0)

        assert score(with_nan) == score(with_zero)

    def test_monotonic_in_each_field(self):
        """Raising one field never lowers the score"""
        base = PRESETS["stable"]

        for name, ceiling in FIELD_CEILINGS.items():
            previous = -1.0
            for step in range(-2, 15):
                value = ceiling * step / 10
                current = score(base.replace(**{name: value}))
                assert current >= previous, f"{name} decreased at {value}"
                previous = current

    def test_custom_weights_change_score(self, max_inputs):
        weights = {
            "rate_shock": 100,
            "uninsured": 0,
            "duration": 0,
            "losses": 0,
            "withdrawal": 0,
            "concentration": 0,
        }
        scorer = StressScorer(weights)

        assert scorer.score(PRESETS["svb"]) == pytest.approx(100 * 2.5 / 6)
        assert scorer.score(max_inputs) == 100


class TestClassify:
    """Test tier thresholds"""

    def test_boundaries(self):
        assert classify(0) is RiskTier.STABLE
        assert classify(39.999) is RiskTier.STABLE
        assert classify(math.nextafter(40, 0)) is RiskTier.STABLE
        assert classify(40) is RiskTier.AT_RISK
        assert classify(69.999) is RiskTier.AT_RISK
        assert classify(math.nextafter(70, 0)) is RiskTier.AT_RISK
        assert classify(70) is RiskTier.CRITICAL
        assert classify(100) is RiskTier.CRITICAL

    def test_presets(self):
        assert classify(score(PRESETS["svb"])) is RiskTier.AT_RISK
        assert classify(score(PRESETS["stable"])) is RiskTier.STABLE


class TestInterpret:
    """Test interpretation text"""

    def test_one_sentence_per_tier(self):
        texts = {interpret(tier) for tier in RiskTier}

        assert len(texts) == 3

    def test_matches_table(self):
        for tier in RiskTier:
            assert interpret(tier) == INTERPRETATIONS[tier]

    def test_stable_text(self):
        assert interpret(RiskTier.STABLE).startswith("Balance-sheet and run dynamics")


class TestDurationLoss:
    """Test duration loss estimate"""

    def test_svb(self):
        assert estimate_duration_loss(6.5, 2.5) == pytest.approx(16.25)

    def test_ceilings(self):
        assert estimate_duration_loss(10, 6) == 60

    def test_zero(self):
        assert estimate_duration_loss(0, 0) == 0

    def test_clamped_high(self):
        assert estimate_duration_loss(50, 6) == 100

    def test_clamped_low(self):
        assert estimate_duration_loss(-5, 2) == 0

    def test_non_finite(self):
        assert estimate_duration_loss(float("nan"), 2) == 0
        assert estimate_duration_loss(float("inf"), 0) == 0
        assert estimate_duration_loss(float("inf"), 1) == 100

    @pytest.mark.parametrize(
        "duration, rate",
        [("6.5", 2.5), (6.5, True), (None, 2.5), (False, 1.0)],
    )
    def test_non_numeric_rejected(self, duration, rate):
        with pytest.raises(TypeError):
            estimate_duration_loss(duration, rate)

    def test_independent_of_score(self):
        """Duration loss only depends on duration and rate shock"""
        a = evaluate(PRESETS["svb"])
        b = evaluate(PRESETS["svb"].replace(uninsured_pct=0, concentration=0))

        assert a.duration_loss_pct == b.duration_loss_pct
        assert a.score != b.score


class TestEvaluate:
    """Test full evaluation"""

    def test_svb_result(self):
        result = evaluate(PRESETS["svb"])

        assert result.score == pytest.approx(67.55)
        assert result.tier is RiskTier.AT_RISK
        assert result.interpretation == INTERPRETATIONS[RiskTier.AT_RISK]
        assert result.duration_loss_pct == pytest.approx(16.25)

    def test_stable_result(self):
        result = evaluate(PRESETS["stable"])

        assert result.score < 40
        assert result.tier is RiskTier.STABLE

    def test_ceiling_result(self, max_inputs):
        result = evaluate(max_inputs)

        assert result.score == 100
        assert result.tier is RiskTier.CRITICAL
        assert result.duration_loss_pct == 60

    def test_zero_result(self, zero_inputs):
        result = evaluate(zero_inputs)

        assert result.score == 0
        assert result.tier is RiskTier.STABLE
        assert result.duration_loss_pct == 0

    def test_idempotent(self):
        first = evaluate(PRESETS["run"])
        second = evaluate(PRESETS["run"])

        assert first == second
        assert first.score == second.score

    def test_factors_for_driver_chart(self):
        result = evaluate(PRESETS["svb"])

        assert len(result.factors.values()) == 6
        assert all(0 <= v <= 1 for v in result.factors.values())

    def test_contributions_sum_to_score(self, scorer):
        result = scorer.evaluate(PRESETS["rate_shock"])

        assert sum(result.contributions().values()) == pytest.approx(result.score)


class TestScorerReporting:
    """Test contributions, preset table and text report"""

    def test_svb_contributions(self, scorer):
        components = scorer.evaluate(PRESETS["svb"]).contributions()

        assert components["rate_shock"] == pytest.approx(7.5)
        assert components["uninsured"] == pytest.approx(17.6)
        assert components["duration"] == pytest.approx(9.75)
        assert components["losses"] == pytest.approx(9.75)
        assert components["withdrawal"] == pytest.approx(14.45)
        assert components["concentration"] == pytest.approx(8.5)

    def test_run_presets(self, scorer):
        df = scorer.run_presets(PRESETS)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 4
        assert list(df["preset"]) == ["svb", "stable", "rate_shock", "run"]

        svb = df[df["preset"] == "svb"].iloc[0]
        assert svb["score"] == pytest.approx(67.55)
        assert svb["tier"] == "At Risk"
        assert svb["duration_loss_pct"] == pytest.approx(16.25)
        assert svb["uninsured"] == pytest.approx(0.8)

    def test_run_presets_empty(self, scorer):
        df = scorer.run_presets({})

        assert len(df) == 0

    def test_generate_report(self, scorer):
        report = scorer.generate_report(PRESETS["svb"])

        assert "67.5" in report or "67.6" in report
        assert "At Risk" in report
        assert "Uninsured" in report
        assert "~16.2% price impact" in report or "~16.3% price impact" in report
        assert "Top driver" in report

    def test_report_without_top_driver(self, scorer):
        report = scorer.generate_report(PRESETS["stable"])

        assert "Stable" in report
        assert "Top driver" not in report
