"""
Region Resolver — coordinates → climate zone profile

Simplified grid over the Indian subcontinent. Each zone is an axis-aligned
box with fixed hazard baselines (0-100) for:
  flood, sea-level rise, heat stress, water scarcity

Boxes are checked in the order of REGION_BOXES and the first match wins.
Several boxes share edges (e.g. Gujarat lat 20-24 vs Deccan lat 14-22), so the
order is part of the model: do not sort or re-prioritise it.

Bounds are inclusive on both sides. No randomness at this stage.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RegionProfile:
    name: str
    region: str
    flood_base: float
    sea_level_base: float
    heat_base: float
    water_scarcity_base: float


@dataclass(frozen=True)
class RegionBox:
    lat_min: float
    lat_max: float
    lng_min: float
    lng_max: Optional[float]  # None = open to the east
    profile: RegionProfile

    def contains(self, lat: float, lng: float) -> bool:
        if lng < self.lng_min:
            return False
        if self.lng_max is not None and lng > self.lng_max:
            return False
        return self.lat_min <= lat <= self.lat_max


# ═══════════════════════════════════════════════════════════════
# Zone table, priority order
#   coastal metros first, then the broad inland belts
# ═══════════════════════════════════════════════════════════════
REGION_BOXES: tuple[RegionBox, ...] = (
    # Coastal zones (high flood + sea-level risk)
    RegionBox(8, 13, 79, 80.5, RegionProfile(
        "Chennai Metropolitan Region", "Tamil Nadu Coast", 72, 68, 75, 62)),
    RegionBox(18, 19.5, 72, 73.5, RegionProfile(
        "Mumbai Metropolitan Area", "Maharashtra Coast", 78, 74, 65, 45)),
    RegionBox(22, 23, 88, 89, RegionProfile(
        "Kolkata Urban Agglomeration", "West Bengal Delta", 85, 80, 70, 30)),
    RegionBox(8, 9, 76, 77.5, RegionProfile(
        "Thiruvananthapuram District", "Kerala Coast", 75, 65, 55, 20)),
    # Indo-Gangetic Plain (flood, heat)
    RegionBox(24, 30, 76, 88, RegionProfile(
        "Indo-Gangetic Plain", "Northern India", 60, 10, 85, 70)),
    # Arid north-west (water scarcity, heat)
    RegionBox(24, 30, 69, 77, RegionProfile(
        "Rajasthan Arid Zone", "Northwestern India", 20, 5, 95, 90)),
    RegionBox(14, 22, 74, 80, RegionProfile(
        "Deccan Plateau Region", "Central India", 40, 8, 78, 65)),
    # Northeast (high rainfall), no eastern bound
    RegionBox(23, 30, 89, None, RegionProfile(
        "Northeast India", "Brahmaputra Basin", 88, 15, 55, 15)),
    RegionBox(20, 24, 68, 75, RegionProfile(
        "Gujarat Coastal Zone", "Western India", 55, 58, 80, 72)),
)

DEFAULT_REGION = "Interior India"
DEFAULT_BASES = (38, 12, 68, 55)  # flood, sea, heat, water


def default_profile(lat: float, lng: float) -> RegionProfile:
    """Profile for coordinates outside every zone box."""
    flood, sea, heat, water = DEFAULT_BASES
    return RegionProfile(
        name=f"Location ({lat:.2f}°N, {lng:.2f}°E)",
        region=DEFAULT_REGION,
        flood_base=flood,
        sea_level_base=sea,
        heat_base=heat,
        water_scarcity_base=water,
    )


def get_region_profile(lat: float, lng: float) -> RegionProfile:
    for box in REGION_BOXES:
        if box.contains(lat, lng):
            return box.profile
    return default_profile(lat, lng)


resolve = get_region_profile
