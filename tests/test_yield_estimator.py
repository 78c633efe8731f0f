"""
Tests for the Yield Estimator.

Noise is pinned with a fixed random source:
- random() = 0.5 -> noise multiplier 1.0
- random() = 0.0 -> noise multiplier 0.9
"""
import random

import pytest
from cropadvisor.services.prediction_models import InvalidAreaError
from cropadvisor.services.yield_estimator import (
    YieldEstimator,
    fertilizer_rate_factor,
    rainfall_factor,
    temperature_factor,
)


class FixedRandom:
    """Random source that always returns the same draw."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


NEUTRAL_NOISE = FixedRandom(0.5)

estimator = YieldEstimator()


class TestScenarios:

    def test_scenario_a_rice_good_conditions(self):
        """1.5 x 1.2 x 1.3 x 1.2 x 1.15 x 1.0 = 3.2292 -> 3.2"""
        raw = estimator.estimate_raw("Rice", 1200, 26, 1500, 10, rng=NEUTRAL_NOISE)
        assert raw == pytest.approx(3.2292)

        assert estimator.estimate("Rice", 1200, 26, 1500, 10, rng=NEUTRAL_NOISE) == 3.2

    def test_scenario_b_cotton_poor_conditions(self):
        """1.5 x 0.5 x 0.7 x 0.8 x 0.85 = 0.357 -> 0.4"""
        raw = estimator.estimate_raw("Cotton(lint)", 600, 38, 100, 5, rng=NEUTRAL_NOISE)
        assert raw == pytest.approx(0.357)

        assert estimator.estimate("Cotton(lint)", 600, 38, 100, 5, rng=NEUTRAL_NOISE) == 0.4

    def test_cotton_alias(self):
        assert estimator.estimate("Cotton", 600, 38, 100, 5, rng=NEUTRAL_NOISE) == 0.4

    def test_unknown_crop_multiplier_is_one(self):
        raw = estimator.estimate_raw("Barley", 900, 25, 750, 10, rng=NEUTRAL_NOISE)
        # 1.5 x 1.0 x 1.0 (rain) x 1.2 (temp) x 1.0 (rate 75)
        assert raw == pytest.approx(1.8)

    def test_sugarcane(self):
        raw = estimator.estimate_raw("Sugarcane", 1500, 28, 2000, 10, rng=NEUTRAL_NOISE)
        assert raw == pytest.approx(1.5 * 3.5 * 1.3 * 1.2 * 1.15)


class TestNoise:

    def test_lower_noise_bound(self):
        raw = estimator.estimate_raw("Rice", 1200, 26, 1500, 10, rng=FixedRandom(0.0))
        assert raw == pytest.approx(3.2292 * 0.9)
        assert estimator.estimate("Rice", 1200, 26, 1500, 10, rng=FixedRandom(0.0)) == 2.9

    def test_upper_noise_bound_is_exclusive(self):
        raw = estimator.estimate_raw("Rice", 1200, 26, 1500, 10, rng=FixedRandom(0.999999))
        assert raw < 3.2292 * 1.1
        assert raw > 3.2292 * 1.099

    def test_seeded_source_is_reproducible(self):
        first = estimator.estimate("Wheat", 1100, 22, 1200, 8, rng=random.Random(42))
        second = estimator.estimate("Wheat", 1100, 22, 1200, 8, rng=random.Random(42))

        assert first == second

    def test_constructor_random_source(self):
        pinned = YieldEstimator(rng=NEUTRAL_NOISE)
        assert pinned.estimate("Rice", 1200, 26, 1500, 10) == 3.2

    def test_call_rng_overrides_constructor_rng(self):
        pinned = YieldEstimator(rng=FixedRandom(0.0))
        assert pinned.estimate("Rice", 1200, 26, 1500, 10, rng=NEUTRAL_NOISE) == 3.2

    def test_configured_seed_makes_default_source_reproducible(self, monkeypatch):
        monkeypatch.setenv("CROPADVISOR_YIELD_SEED", "7")

        first = estimator.estimate_raw("Maize", 1300, 24, 1800, 12)
        second = estimator.estimate_raw("Maize", 1300, 24, 1800, 12)

        assert first == second

    def test_result_clamped_to_minimum(self):
        """A degenerate source driving the product below zero still yields 0.1."""
        assert estimator.estimate_raw("Cotton(lint)", 600, 38, 100, 5, rng=FixedRandom(-5.0)) == 0.1
        assert estimator.estimate("Cotton(lint)", 600, 38, 100, 5, rng=FixedRandom(-5.0)) == 0.1

    @pytest.mark.parametrize("seed", range(25))
    def test_positive_and_one_decimal(self, seed):
        rng = random.Random(seed)
        crop = rng.choice(["Rice", "Wheat", "Maize", "Sugarcane", "Cotton(lint)", "Barley"])
        area = rng.uniform(0.5, 80)
        value = estimator.estimate(
            crop,
            rng.uniform(0, 3500),
            rng.uniform(5, 45),
            rng.uniform(1, 40000),
            area,
            rng=rng,
        )

        assert value > 0
        assert value == round(value, 1)


class TestFactors:
    """Factor thresholds are strict inequalities."""

    @pytest.mark.parametrize("rainfall,expected", [
        (799, 0.7), (800, 1.0), (1000, 1.0), (1001, 1.3), (1999, 1.3), (2000, 1.0), (3000, 1.0), (0, 0.7),
    ])
    def test_rainfall_factor(self, rainfall, expected):
        assert rainfall_factor(rainfall) == expected

    @pytest.mark.parametrize("temperature,expected", [
        (14.9, 0.8), (15, 1.0), (20, 1.0), (20.1, 1.2), (29.9, 1.2), (30, 1.0), (35, 1.0), (35.1, 0.8),
    ])
    def test_temperature_factor(self, temperature, expected):
        assert temperature_factor(temperature) == expected

    @pytest.mark.parametrize("rate,expected", [
        (49, 0.85), (50, 1.0), (100, 1.0), (101, 1.15), (249, 1.15), (250, 1.0), (400, 1.0),
    ])
    def test_fertilizer_rate_factor(self, rate, expected):
        assert fertilizer_rate_factor(rate) == expected

    def test_factor_breakdown(self):
        factors = estimator.get_factors("Wheat", 1500, 25, 2000, 10)

        assert factors == {
            "base": 1.5,
            "crop": 1.1,
            "rainfall": 1.3,
            "temperature": 1.2,
            "fertilizer_rate": 1.15,
        }


class TestAreaValidation:

    @pytest.mark.parametrize("area", [0, -3])
    def test_zero_or_negative_area_fails(self, area):
        with pytest.raises(InvalidAreaError):
            estimator.estimate("Rice", 1200, 26, 1500, area, rng=NEUTRAL_NOISE)

    def test_invalid_area_is_value_error(self):
        with pytest.raises(ValueError):
            estimator.estimate("Rice", 1200, 26, 1500, 0, rng=NEUTRAL_NOISE)
