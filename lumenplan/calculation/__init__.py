"""
Lumenplan Calculation Module

Lumen-method factors and the two illuminance estimates (fixed-ratio
distribution and inverse-square point sampling).
"""

from lumenplan.calculation.lumen_method import (
    MAINTENANCE_FACTOR_TABLE,
    room_cavity_ratio,
    coefficient_of_utilization,
    maintenance_factor,
    number_of_lamps,
)

from lumenplan.calculation.illuminance import (
    estimate_illuminance_distribution,
    illuminance_at_point,
    generate_illuminance_grid,
)

__all__ = [
    # Lumen method
    "MAINTENANCE_FACTOR_TABLE",
    "room_cavity_ratio",
    "coefficient_of_utilization",
    "maintenance_factor",
    "number_of_lamps",
    # Illuminance
    "estimate_illuminance_distribution",
    "illuminance_at_point",
    "generate_illuminance_grid",
]
