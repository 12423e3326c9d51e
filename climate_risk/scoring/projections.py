"""
20-year hazard projection (IPCC SSP-style trajectories)

Biennial points from the current year. For each hazard:

  value(t) = min(100, base + t·rate·a + t²·curve·a)      t: 0 → 1 over the horizon

  hazard          rate   curve
  flood            18      7
  heat             15      9
  sea level        22      5
  water            12      6

`a` is the scenario acceleration multiplier; a = 1.0 is the moderate-emissions
(SSP2-4.5) baseline used for every assessment report. Rates are non-negative,
so each series is non-decreasing and saturates at 100.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from climate_risk.schemas.risk_report import ClimateFactorScore, ProjectionDataPoint
from climate_risk.scoring.factors import (
    FACTOR_WEIGHTS, FLOOD, HEAT, SEA_LEVEL, WATER, factor_score, round_half_up,
)

# (rate, curve) per hazard
TRAJECTORY_RATES: dict[str, tuple[float, float]] = {
    FLOOD: (18.0, 7.0),
    HEAT: (15.0, 9.0),
    SEA_LEVEL: (22.0, 5.0),
    WATER: (12.0, 6.0),
}

MISSING_FACTOR_BASE = 50.0
DEFAULT_HORIZON_YEARS = 20
STEP_YEARS = 2


class Scenario(str, Enum):
    SSP1 = "ssp1"
    SSP2 = "ssp2"
    SSP5 = "ssp5"

    @property
    def acceleration(self) -> float:
        return SCENARIO_ACCELERATION[self]

    @property
    def label(self) -> str:
        return SCENARIO_LABELS[self]


SCENARIO_ACCELERATION: dict[Scenario, float] = {
    Scenario.SSP1: 0.6,   # strong mitigation, ~1.5°C by 2100
    Scenario.SSP2: 1.0,   # middle road, ~2.5°C
    Scenario.SSP5: 1.7,   # high emission stress test, ~4°C+
}

SCENARIO_LABELS: dict[Scenario, str] = {
    Scenario.SSP1: "SSP1-1.9",
    Scenario.SSP2: "SSP2-4.5",
    Scenario.SSP5: "SSP5-8.5",
}


def _trajectory(base: float, factor: str, t: float, acceleration: float) -> float:
    rate, curve = TRAJECTORY_RATES[factor]
    return min(100.0, base + t * rate * acceleration + t * t * curve * acceleration)


def generate_projections(
    factors: list[ClimateFactorScore],
    acceleration: float = 1.0,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    base_year: Optional[int] = None,
) -> list[ProjectionDataPoint]:
    """
    Extrapolate the four sub-scores over `horizon_years` in 2-year steps.

    Default horizon gives 11 points. A factor missing from the list is seeded
    at 50.
    """
    if horizon_years < STEP_YEARS or horizon_years % STEP_YEARS:
        raise ValueError(f"horizon_years must be a positive multiple of {STEP_YEARS}")

    year0 = base_year if base_year is not None else datetime.now(timezone.utc).year
    bases = {name: factor_score(factors, name, MISSING_FACTOR_BASE) for name in TRAJECTORY_RATES}
    steps = horizon_years // STEP_YEARS + 1

    points: list[ProjectionDataPoint] = []
    for i in range(steps):
        t = i / (steps - 1)
        values = {name: _trajectory(bases[name], name, t, acceleration) for name in TRAJECTORY_RATES}
        composite = sum(values[name] * weight for name, weight in FACTOR_WEIGHTS.items())

        points.append(ProjectionDataPoint(
            year=year0 + i * STEP_YEARS,
            flood_risk=round_half_up(values[FLOOD]),
            heat_stress=round_half_up(values[HEAT]),
            sea_level_rise=round_half_up(values[SEA_LEVEL]),
            water_scarcity=round_half_up(values[WATER]),
            composite_risk=round_half_up(composite),
        ))

    return points


def generate_scenario_projections(
    factors: list[ClimateFactorScore],
    scenario: Scenario = Scenario.SSP2,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    base_year: Optional[int] = None,
) -> list[ProjectionDataPoint]:
    return generate_projections(
        factors,
        acceleration=Scenario(scenario).acceleration,
        horizon_years=horizon_years,
        base_year=base_year,
    )
