"""
Illuminance Estimates for Lumenplan

Two separate notions of illuminance live here and are not meant to agree:

1. Distribution estimate (headline numbers)
   The average follows from total delivered flux over the floor area:
       E_avg = N × Φ × CU × MF / A
   Minimum and maximum are fixed ratios of the average (0.7 and 1.3), so the
   reported uniformity is always 0.7. Illustrative only, not simulated.

2. Point sampling (visualization grid)
   Each fixture is treated as an isotropic point source:
       E = Σ Φ × CU × MF / (4π d²)
   with d the 3D distance from the fixture to the point at workplane height.
   Not a validated photometric model.
"""

from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from lumenplan.results.types import IlluminanceDistribution, IlluminanceGridPoint, LampPosition, positions_as_array


MAX_RATIO = 1.3
MIN_RATIO = 0.7
DEFAULT_GRID_SIZE = 20


def estimate_illuminance_distribution(
    number_of_lamps: int,
    flux_per_lamp: float,
    cu: float,
    mf: float,
    floor_area: float,
) -> IlluminanceDistribution:
    average = (number_of_lamps * flux_per_lamp * cu * mf) / floor_area
    minimum = average * MIN_RATIO
    maximum = average * MAX_RATIO
    return IlluminanceDistribution(
        average=average,
        minimum=minimum,
        maximum=maximum,
        uniformity=minimum / average,
    )


def illuminance_at_point(
    x: float,
    y: float,
    lamp_positions: Sequence[LampPosition],
    flux_per_lamp: float,
    workplane_height: float,
    cu: float,
    mf: float,
) -> float:
    total = 0.0
    effective_flux = flux_per_lamp * cu * mf
    for lamp in lamp_positions:
        dx = lamp.x - x
        dy = lamp.y - y
        dz = lamp.z - workplane_height
        d2 = dx * dx + dy * dy + dz * dz
        total += effective_flux / (4.0 * math.pi * d2)
    return total


def _sample_field(
    xs: np.ndarray,
    ys: np.ndarray,
    lamps: np.ndarray,
    effective_flux: float,
    workplane_height: float,
) -> np.ndarray:
    # xs/ys shape (P,), lamps shape (L,3) -> (P,)
    if lamps.shape[0] == 0:
        return np.zeros_like(xs, dtype=float)
    dx = lamps[None, :, 0] - xs[:, None]
    dy = lamps[None, :, 1] - ys[:, None]
    dz = lamps[None, :, 2] - workplane_height
    d2 = dx * dx + dy * dy + dz * dz
    return np.sum(effective_flux / (4.0 * np.pi * d2), axis=1)


def generate_illuminance_grid(
    room_length: float,
    room_width: float,
    workplane_height: float,
    lamp_positions: Sequence[LampPosition],
    flux_per_lamp: float,
    cu: float,
    mf: float,
    grid_size: int = DEFAULT_GRID_SIZE,
) -> List[IlluminanceGridPoint]:
    """
    Sample the point model on a grid_size × grid_size lattice spanning the floor
    from wall to wall (corners included). Points are ordered with x outer, y inner.
    """
    n = max(2, int(grid_size))
    axis = np.arange(n, dtype=float) / (n - 1)
    gx, gy = np.meshgrid(axis * room_length, axis * room_width, indexing="ij")
    xs = gx.reshape(-1)
    ys = gy.reshape(-1)

    values = _sample_field(
        xs,
        ys,
        positions_as_array(list(lamp_positions)),
        flux_per_lamp * cu * mf,
        workplane_height,
    )
    return [
        IlluminanceGridPoint(x=float(x), y=float(y), illuminance=float(v))
        for x, y, v in zip(xs, ys, values)
    ]
