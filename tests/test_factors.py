"""
Unit tests for the hazard factor scorer.
"""
import random

import pytest

from climate_risk.schemas.risk_report import RiskClassification
from climate_risk.scoring.classification import classify_risk
from climate_risk.scoring.factors import (
    FACTOR_WEIGHTS, FLOOD, HEAT, SEA_LEVEL, WATER,
    build_factor, calculate_factor_scores, clamp_score, composite_score,
    get_property_modifier, round_half_up,
)
from climate_risk.scoring.noise import NoiseSource, ZeroNoise

MUMBAI = (19.05, 72.83)
KOLKATA = (22.57, 88.36)
JODHPUR = (26.24, 73.02)


class FixedRandom:
    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def _scores(factors) -> dict:
    return {f.factor: f.score for f in factors}


class TestWeights:
    def test_four_factors_in_fixed_order(self):
        factors = calculate_factor_scores(*MUMBAI, "residential", noise=ZeroNoise())
        assert [f.factor for f in factors] == [FLOOD, SEA_LEVEL, HEAT, WATER]
        assert [f.weight for f in factors] == [0.35, 0.25, 0.25, 0.15]

    def test_weights_sum_to_one(self):
        assert sum(FACTOR_WEIGHTS.values()) == pytest.approx(1.0)

    @pytest.mark.parametrize("property_type", ["residential", "commercial", "industrial", "agricultural", "mixed_use"])
    def test_every_property_type_scores_four_factors(self, property_type):
        factors = calculate_factor_scores(*KOLKATA, property_type, noise=NoiseSource.seeded(3))
        assert len(factors) == 4
        assert all(0 <= f.score <= 100 for f in factors)

    def test_weighted_score_rounded_to_one_decimal(self):
        for f in calculate_factor_scores(*MUMBAI, "commercial", noise=NoiseSource.seeded(5)):
            assert f.weighted_score == round_half_up(f.score * f.weight)


class TestBaseAndModifiers:
    def test_mumbai_residential_without_noise(self):
        factors = calculate_factor_scores(*MUMBAI, "residential", noise=ZeroNoise())
        # Residential adds +5 heat only
        assert _scores(factors) == {FLOOD: 78, SEA_LEVEL: 74, HEAT: 70, WATER: 45}

    def test_agricultural_modifiers(self):
        factors = calculate_factor_scores(*JODHPUR, "agricultural", noise=ZeroNoise())
        assert _scores(factors) == {FLOOD: 35, SEA_LEVEL: 10, HEAT: 100, WATER: 100}

    def test_unknown_type_falls_back_to_residential(self):
        unknown = calculate_factor_scores(*MUMBAI, "houseboat", noise=ZeroNoise())
        residential = calculate_factor_scores(*MUMBAI, "residential", noise=ZeroNoise())
        assert _scores(unknown) == _scores(residential)

    def test_none_type_falls_back_to_residential(self):
        assert get_property_modifier(None) == get_property_modifier("residential")


class TestNoise:
    def test_noise_range(self):
        low = NoiseSource(FixedRandom(0.0))
        high = NoiseSource(FixedRandom(1.0))
        mid = NoiseSource(FixedRandom(0.5))
        assert low() == -6.0
        assert high() == 6.0
        assert mid() == 0.0

    def test_seeded_draws_are_bounded(self):
        noise = NoiseSource.seeded(99)
        draws = [noise() for _ in range(500)]
        assert all(-6.0 <= d <= 6.0 for d in draws)

    def test_same_seed_same_scores(self):
        a = calculate_factor_scores(*MUMBAI, "industrial", noise=NoiseSource(random.Random(42)))
        b = calculate_factor_scores(*MUMBAI, "industrial", noise=NoiseSource(random.Random(42)))
        assert a == b

    def test_noise_shifts_score_at_most_six(self):
        factors = calculate_factor_scores(*MUMBAI, "residential", noise=NoiseSource.seeded(8))
        base = {FLOOD: 78, SEA_LEVEL: 74, HEAT: 70, WATER: 45}
        for f in factors:
            assert abs(f.score - base[f.factor]) <= 6


class TestClamp:
    def test_upper_clamp(self):
        factors = calculate_factor_scores(*KOLKATA, "agricultural", noise=lambda: 6.0)
        assert _scores(factors)[FLOOD] == 100  # 85 + 15 + 6

    def test_lower_clamp(self):
        factors = calculate_factor_scores(*JODHPUR, "residential", noise=lambda: -6.0)
        assert _scores(factors)[SEA_LEVEL] == 0  # 5 + 0 - 6

    def test_round_half_up(self):
        assert clamp_score(49.5) == 50
        assert clamp_score(50.5) == 51
        assert clamp_score(50.49) == 50
        assert clamp_score(-0.5) == 0
        assert clamp_score(140.2) == 100


class TestDescriptions:
    def test_flood_wording(self):
        assert build_factor(FLOOD, 61).description.startswith("High")
        assert build_factor(FLOOD, 60).description.startswith("Moderate")
        assert build_factor(FLOOD, 36).description.startswith("Moderate")
        assert build_factor(FLOOD, 35).description.startswith("Low")

    def test_sea_level_rise_metres(self):
        assert "3.70m sea-level rise by 2050" in build_factor(SEA_LEVEL, 74).description

    def test_heat_wording(self):
        assert "dangerous" in build_factor(HEAT, 71).description
        assert "elevated" in build_factor(HEAT, 70).description
        assert "manageable" in build_factor(HEAT, 45).description

    def test_water_wording(self):
        assert "critical" in build_factor(WATER, 61).description
        assert "stressed" in build_factor(WATER, 41).description
        assert "adequate" in build_factor(WATER, 40).description

    def test_data_source_attached(self):
        assert build_factor(FLOOD, 50).data_source == "IMD Gridded Rainfall + NATMO Flood Hazard Atlas"


class TestComposite:
    def test_composite_is_sum_of_weighted(self):
        factors = [build_factor(FLOOD, 70), build_factor(SEA_LEVEL, 60), build_factor(HEAT, 80), build_factor(WATER, 50)]
        # 24.5 + 15.0 + 20.0 + 7.5
        assert composite_score(factors) == pytest.approx(67.0)

    def test_empty(self):
        assert composite_score([]) == 0


class TestWeightedRounding:
    @pytest.mark.parametrize("factor,score,expected", [
        (SEA_LEVEL, 17, 4.3),
        (HEAT, 21, 5.3),
        (SEA_LEVEL, 1, 0.3),
        (FLOOD, 38, 13.3),
        (WATER, 14, 2.1),
    ])
    def test_ties_round_up(self, factor, score, expected):
        assert build_factor(factor, score).weighted_score == expected

    def test_tie_rounding_lifts_composite_into_moderate(self):
        factors = [build_factor(FLOOD, 38), build_factor(SEA_LEVEL, 17), build_factor(HEAT, 21), build_factor(WATER, 14)]
        # 13.3 + 4.3 + 5.3 + 2.1
        assert composite_score(factors) == 25.0
        assert classify_risk(composite_score(factors)) == RiskClassification.MODERATE

    def test_round_half_up_places(self):
        assert round_half_up(4.25) == 4.3
        assert round_half_up(42.25) == 42.3
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(4.24) == 4.2
