"""
Climate Factor Scorer — 4 hazard sub-scores

For each hazard:
  score = clamp_0_100(round(region_base + property_modifier + noise()))
  weighted_score = round_half_up(score × weight, 1)

Weights (must sum to 1.0):
  Flood probability        0.35  (direct property damage)
  Sea-level rise exposure  0.25  (long-term asset devaluation)
  Heat stress index        0.25  (operational + habitability)
  Water scarcity           0.15  (utility + habitability)

Regional baselines simulate IMD / NATMO / IPCC AR6 / CWMI / NIUA datasets —
see regions.py. Unknown property types fall back to the residential
modifiers; this function never raises.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from dataclasses import dataclass
from typing import Callable, Optional, Union

from climate_risk.schemas.assessment_request import PropertyType
from climate_risk.schemas.risk_report import ClimateFactorScore
from climate_risk.scoring.noise import NoiseSource
from climate_risk.scoring.regions import get_region_profile

FLOOD = "Flood Probability"
SEA_LEVEL = "Sea-Level Rise Exposure"
HEAT = "Heat Stress Index"
WATER = "Water Scarcity Projection"


# ═══════════════════════════════════════════════════════════════
# Factor weights, must sum to 1.0
# Order here is the order of the returned factor list.
# ═══════════════════════════════════════════════════════════════
FACTOR_WEIGHTS: dict[str, float] = {
    FLOOD: 0.35,
    SEA_LEVEL: 0.25,
    HEAT: 0.25,
    WATER: 0.15,
}
assert abs(sum(FACTOR_WEIGHTS.values()) - 1.0) < 1e-9, "Weights must sum to 1.0"

DATA_SOURCES: dict[str, str] = {
    FLOOD: "IMD Gridded Rainfall + NATMO Flood Hazard Atlas",
    SEA_LEVEL: "IPCC AR6 Sea-Level Projections + INCOIS Coastal Vulnerability Index",
    HEAT: "NIUA Heat Action Plans + IMD Temperature Projections",
    WATER: "NITI Aayog CWMI + CGWB Groundwater Atlas",
}


# ═══════════════════════════════════════════════════════════════
# Property type modifiers (signed offsets on the regional base)
# ═══════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class PropertyModifier:
    flood: int
    heat: int
    sea: int
    water: int


PROPERTY_MODIFIERS: dict[PropertyType, PropertyModifier] = {
    PropertyType.RESIDENTIAL: PropertyModifier(flood=0, heat=5, sea=0, water=0),
    PropertyType.COMMERCIAL: PropertyModifier(flood=-5, heat=8, sea=5, water=5),
    PropertyType.INDUSTRIAL: PropertyModifier(flood=10, heat=10, sea=8, water=15),
    PropertyType.AGRICULTURAL: PropertyModifier(flood=15, heat=15, sea=5, water=20),
    PropertyType.MIXED_USE: PropertyModifier(flood=5, heat=8, sea=5, water=8),
}


def get_property_modifier(property_type: Union[PropertyType, str, None]) -> PropertyModifier:
    try:
        key = PropertyType(property_type)
    except ValueError:
        # Unrecognised tag → residential
        key = PropertyType.RESIDENTIAL
    return PROPERTY_MODIFIERS[key]


def clamp_score(value: float) -> int:
    """Round half up (as the dashboard does), then clamp to 0-100."""
    return max(0, min(100, math.floor(value + 0.5)))


def round_half_up(value: float, places: int = 1) -> float:
    """
    Decimal rounding with ties away from zero, taken on the exact binary value
    of `value`. 17 × 0.25 = 4.25 → 4.3, where round() would give 4.2.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


# ═══════════════════════════════════════════════════════════════
# Descriptions: wording branches on the sub-score
# ═══════════════════════════════════════════════════════════════
def _flood_description(score: int) -> str:
    level = "High" if score > 60 else "Moderate" if score > 35 else "Low"
    return (
        f"{level} annual flood inundation probability. "
        "Based on IMD rainfall anomaly data and NATMO flood hazard maps."
    )


def _sea_level_description(score: int) -> str:
    return (
        f"IPCC AR6 SSP2-4.5 scenario projects {score * 0.05:.2f}m sea-level rise by 2050. "
        "Coastal proximity amplifies long-term asset devaluation risk."
    )


def _heat_description(score: int) -> str:
    level = "dangerous" if score > 70 else "elevated" if score > 45 else "manageable"
    return (
        f"Wet-Bulb Globe Temperature (WBGT) analysis indicates {level} heat exposure. "
        "Affects habitability and property operational costs."
    )


def _water_description(score: int) -> str:
    level = "critical" if score > 60 else "stressed" if score > 40 else "adequate"
    return (
        f"CWMI composite score indicates {level} water availability through 2040. "
        "Groundwater depletion rate factored in."
    )


_DESCRIBERS: dict[str, Callable[[int], str]] = {
    FLOOD: _flood_description,
    SEA_LEVEL: _sea_level_description,
    HEAT: _heat_description,
    WATER: _water_description,
}


def build_factor(factor: str, score: int) -> ClimateFactorScore:
    weight = FACTOR_WEIGHTS[factor]
    return ClimateFactorScore(
        factor=factor,
        score=score,
        weight=weight,
        weighted_score=round_half_up(score * weight),
        description=_DESCRIBERS[factor](score),
        data_source=DATA_SOURCES[factor],
    )


def calculate_factor_scores(
    lat: float,
    lng: float,
    property_type: Union[PropertyType, str, None],
    noise: Optional[Callable[[], float]] = None,
) -> list[ClimateFactorScore]:
    """
    Score the four hazards for a location + property type.

    `noise` is any zero-arg callable returning a float offset; defaults to an
    unseeded NoiseSource. Draw order is flood, sea, heat, water.
    """
    noise = noise or NoiseSource()
    profile = get_region_profile(lat, lng)
    mod = get_property_modifier(property_type)

    flood = clamp_score(profile.flood_base + mod.flood + noise())
    sea = clamp_score(profile.sea_level_base + mod.sea + noise())
    heat = clamp_score(profile.heat_base + mod.heat + noise())
    water = clamp_score(profile.water_scarcity_base + mod.water + noise())

    scores = {FLOOD: flood, SEA_LEVEL: sea, HEAT: heat, WATER: water}
    return [build_factor(name, scores[name]) for name in FACTOR_WEIGHTS]


def composite_score(factors: list[ClimateFactorScore]) -> float:
    """Σ weighted_score, rounded to one decimal."""
    return round_half_up(sum(f.weighted_score for f in factors))


def factor_score(factors: list[ClimateFactorScore], name: str, default: float) -> float:
    return next((f.score for f in factors if f.factor == name), default)
