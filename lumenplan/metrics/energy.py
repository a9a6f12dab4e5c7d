from __future__ import annotations

from typing import Optional, Tuple

from lumenplan.database.catalog import FixtureRecord
from lumenplan.results.types import EFFICIENCY_RATINGS, EnergyMetrics


FALLBACK_EFFICACY_LM_PER_W = 100.0

# Upper bounds (exclusive) on power density in W/m², paired with EFFICIENCY_RATINGS
# best first. Anything at or above the last bound gets the final rating.
EFFICIENCY_THRESHOLDS: Tuple[Tuple[float, str], ...] = tuple(zip((5.0, 8.0, 12.0, 15.0), EFFICIENCY_RATINGS))


def efficiency_rating(power_density: float) -> str:
    for upper, rating in EFFICIENCY_THRESHOLDS:
        if power_density < upper:
            return rating
    return EFFICIENCY_RATINGS[-1]


def watts_per_lamp(
    flux_per_lamp: float,
    fixture: Optional[FixtureRecord] = None,
    fallback_efficacy: float = FALLBACK_EFFICACY_LM_PER_W,
) -> float:
    if fixture is not None and fixture.wattage_w > 0:
        return float(fixture.wattage_w)
    return flux_per_lamp / fallback_efficacy


def calculate_energy_metrics(
    number_of_lamps: int,
    flux_per_lamp: float,
    floor_area: float,
    fixture: Optional[FixtureRecord] = None,
    fallback_efficacy: float = FALLBACK_EFFICACY_LM_PER_W,
) -> EnergyMetrics:
    """Installed load and power density; catalog wattage wins over the efficacy assumption."""
    per_lamp = watts_per_lamp(flux_per_lamp, fixture, fallback_efficacy)
    total_power = number_of_lamps * per_lamp
    power_density = total_power / floor_area
    return EnergyMetrics(
        total_power=total_power,
        power_density=power_density,
        efficiency_rating=efficiency_rating(power_density),
        watts_per_lamp=per_lamp,
        fixture_label=fixture.label if fixture is not None else None,
    )
