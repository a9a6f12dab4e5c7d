from __future__ import annotations

import logging
from typing import Optional

from lumenplan.calculation.illuminance import (
    DEFAULT_GRID_SIZE,
    estimate_illuminance_distribution,
    generate_illuminance_grid,
)
from lumenplan.calculation.lumen_method import (
    coefficient_of_utilization,
    maintenance_factor,
    number_of_lamps,
    room_cavity_ratio,
)
from lumenplan.database.catalog import FixtureCatalog, FixtureRecord
from lumenplan.design.placement import MOUNT_CLEARANCE_M, generate_lamp_positions, solve_layout
from lumenplan.metrics.energy import FALLBACK_EFFICACY_LM_PER_W, calculate_energy_metrics
from lumenplan.models.room import LightingRequirements, RoomDimensions
from lumenplan.project.validator import LightingInputError, validate_inputs
from lumenplan.reporting.schedules import build_bill_of_materials
from lumenplan.results.types import LightingComputation, LightingResults

logger = logging.getLogger(__name__)


def compute_lighting(
    room: RoomDimensions,
    requirements: LightingRequirements,
    catalog: Optional[FixtureCatalog] = None,
    fixture: Optional[FixtureRecord] = None,
    grid_size: int = DEFAULT_GRID_SIZE,
    mount_clearance: float = MOUNT_CLEARANCE_M,
    fallback_efficacy: float = FALLBACK_EFFICACY_LM_PER_W,
) -> LightingComputation:
    """
    Run the full lumen-method pipeline for one room.

    Inputs are validated up front; every later stage assumes valid input and
    is a pure function of what came before. The run either returns a complete
    result set or raises LightingInputError, nothing in between.

    Args:
        room: Room geometry in meters
        requirements: Target illuminance and lamp/room properties
        catalog: Fixture catalog used to find the wattage matching the flux
        fixture: Explicit fixture; takes precedence over the catalog lookup
        grid_size: Points per side of the visualization grid
        mount_clearance: Fixture distance below the ceiling (m)
        fallback_efficacy: lm/W assumed when no fixture is known

    Returns:
        LightingComputation with results, lamp positions and the illuminance grid
    """
    validate_inputs(room, requirements, mount_clearance=mount_clearance)
    if int(grid_size) < 2:
        raise LightingInputError([f"Grid size must be >= 2, got {grid_size!r}"])

    floor_area = room.floor_area
    rcr = room_cavity_ratio(room)
    cu = coefficient_of_utilization(rcr, requirements.ceiling_reflectance, requirements.wall_reflectance)
    mf = maintenance_factor(requirements.contamination_level, requirements.maintenance_interval)

    try:
        n = number_of_lamps(requirements.target_illuminance, floor_area, requirements.flux_per_lamp, cu, mf)
    except ValueError as e:
        raise LightingInputError([str(e)]) from e
    if n < 1:
        raise LightingInputError(["Fixture count resolved to zero; target illuminance or floor area too small"])
    logger.debug("RCR=%.4f CU=%.4f MF=%.2f -> %d fixtures", rcr, cu, mf, n)

    layout = solve_layout(n, room.length, room.width)
    positions = generate_lamp_positions(layout, room, n, mount_clearance=mount_clearance)

    distribution = estimate_illuminance_distribution(n, requirements.flux_per_lamp, cu, mf, floor_area)
    grid = generate_illuminance_grid(
        room.length,
        room.width,
        room.workplane_height,
        positions,
        requirements.flux_per_lamp,
        cu,
        mf,
        grid_size=grid_size,
    )

    if fixture is None and catalog is not None:
        fixture = catalog.find_by_flux(requirements.flux_per_lamp)
        if fixture is None:
            logger.debug("No catalog fixture at %g lm; assuming %g lm/W", requirements.flux_per_lamp, fallback_efficacy)

    energy = calculate_energy_metrics(
        n, requirements.flux_per_lamp, floor_area, fixture=fixture, fallback_efficacy=fallback_efficacy
    )
    bom = build_bill_of_materials(n, room, layout, fixture=fixture)

    results = LightingResults(
        number_of_lamps=n,
        room_cavity_ratio=rcr,
        coefficient_of_utilization=cu,
        maintenance_factor=mf,
        layout=layout,
        illuminance_distribution=distribution,
        energy_metrics=energy,
        bill_of_materials=tuple(bom),
    )
    logger.debug(
        "Layout %dx%d, Eavg=%.1f lx, %.1f W (%s)",
        layout.rows,
        layout.columns,
        distribution.average,
        energy.total_power,
        energy.efficiency_rating,
    )
    return LightingComputation(
        results=results,
        lamp_positions=tuple(positions),
        illuminance_grid=tuple(grid),
        grid_size=int(grid_size),
    )
