"""
Lumen Method Factors

Derived quantities used by the lumen method:

    N = (E × A) / (Φ × CU × MF)

Where:
    E  = target illuminance on the workplane (lux)
    A  = floor area (m²)
    Φ  = luminous flux per lamp (lumens)
    CU = coefficient of utilization
    MF = maintenance factor

CU is a linear approximation driven by the room cavity ratio and the
ceiling/wall reflectances, clamped to [0.3, 0.85]. MF comes from a fixed
contamination × maintenance-interval table and is never interpolated.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

from lumenplan.models.room import ContaminationLevel, RoomDimensions


BASE_CU = 0.85
CU_MIN = 0.3
CU_MAX = 0.85
RCR_PENALTY_PER_UNIT = 0.05


MAINTENANCE_FACTOR_TABLE: Mapping[ContaminationLevel, Mapping[int, float]] = MappingProxyType({
    ContaminationLevel.VERY_CLEAN: MappingProxyType({1: 0.96, 2: 0.94, 3: 0.92, 4: 0.90, 5: 0.88, 6: 0.87}),
    ContaminationLevel.CLEAN: MappingProxyType({1: 0.93, 2: 0.89, 3: 0.85, 4: 0.82, 5: 0.79, 6: 0.77}),
    ContaminationLevel.NORMAL: MappingProxyType({1: 0.89, 2: 0.84, 3: 0.79, 4: 0.75, 5: 0.70, 6: 0.67}),
    ContaminationLevel.DIRTY: MappingProxyType({1: 0.83, 2: 0.78, 3: 0.73, 4: 0.69, 5: 0.65, 6: 0.62}),
})


def room_cavity_ratio(room: RoomDimensions) -> float:
    """RCR = 5 × cavity height × (L + W) / (L × W)."""
    return 5.0 * room.cavity_height * (room.length + room.width) / (room.length * room.width)


def coefficient_of_utilization(rcr: float, ceiling_reflectance: float, wall_reflectance: float) -> float:
    rcr_factor = 1.0 - (rcr - 1.0) * RCR_PENALTY_PER_UNIT
    reflectance_factor = 0.7 + 0.3 * (ceiling_reflectance + wall_reflectance) / 2.0
    cu = BASE_CU * rcr_factor * reflectance_factor
    return max(CU_MIN, min(CU_MAX, cu))


def maintenance_factor(contamination_level, maintenance_interval: int) -> float:
    level = ContaminationLevel.parse(contamination_level)
    if isinstance(maintenance_interval, bool) or maintenance_interval not in MAINTENANCE_FACTOR_TABLE[level]:
        raise ValueError(f"Maintenance interval must be one of 1..6 years, got {maintenance_interval!r}")
    return MAINTENANCE_FACTOR_TABLE[level][int(maintenance_interval)]


def number_of_lamps(
    target_illuminance: float,
    floor_area: float,
    flux_per_lamp: float,
    cu: float,
    mf: float,
) -> int:
    # Partial fixtures cannot be installed; round up rather than undershoot.
    raw = (target_illuminance * floor_area) / (flux_per_lamp * cu * mf)
    if not math.isfinite(raw):
        raise ValueError(f"Fixture count is not a finite number ({raw!r})")
    return int(math.ceil(raw))
