from __future__ import annotations

import math
import numbers
from typing import Any, List

from lumenplan.models.room import MAINTENANCE_INTERVALS, ContaminationLevel, LightingRequirements, RoomDimensions


class LightingInputError(ValueError):
    """Raised before any calculation when room or requirement inputs are unusable."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) if self.errors else "Invalid lighting input")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(float(value))


def _positive(errors: List[str], label: str, value: Any) -> None:
    if not _is_number(value):
        errors.append(f"{label} must be a finite number, got {value!r}")
    elif float(value) <= 0.0:
        errors.append(f"{label} must be > 0, got {value!r}")


def _unit_interval(errors: List[str], label: str, value: Any) -> None:
    if not _is_number(value):
        errors.append(f"{label} must be a finite number, got {value!r}")
    elif not 0.0 <= float(value) <= 1.0:
        errors.append(f"{label} must be within [0, 1], got {value!r}")


def _validate_room(room: RoomDimensions, mount_clearance: float) -> List[str]:
    errors: List[str] = []
    _positive(errors, "Room length", room.length)
    _positive(errors, "Room width", room.width)
    _positive(errors, "Room height", room.height)
    if not errors:
        # Each side can be fine while the product under- or overflows.
        area = float(room.length) * float(room.width)
        if not math.isfinite(area) or area <= 0.0:
            errors.append(f"Floor area must be a finite number > 0, got {area!r}")

    wp = room.workplane_height
    if not _is_number(wp):
        errors.append(f"Workplane height must be a finite number, got {wp!r}")
    elif float(wp) < 0.0:
        errors.append(f"Workplane height must be >= 0, got {wp!r}")
    elif _is_number(room.height) and float(room.height) > 0.0:
        if float(room.height) <= float(wp):
            errors.append("Room height must be greater than workplane height")
        elif float(room.height) - mount_clearance <= float(wp):
            errors.append(
                f"Fixtures mounted {mount_clearance:g} m below the ceiling would sit at or below the workplane"
            )
    return errors


def _validate_requirements(req: LightingRequirements) -> List[str]:
    errors: List[str] = []
    _positive(errors, "Target illuminance", req.target_illuminance)
    _positive(errors, "Flux per lamp", req.flux_per_lamp)
    _unit_interval(errors, "Ceiling reflectance", req.ceiling_reflectance)
    _unit_interval(errors, "Wall reflectance", req.wall_reflectance)

    try:
        ContaminationLevel.parse(req.contamination_level)
    except ValueError as e:
        errors.append(str(e))

    interval = req.maintenance_interval
    if isinstance(interval, bool) or not _is_number(interval) or float(interval) not in MAINTENANCE_INTERVALS:
        errors.append(f"Maintenance interval must be one of 1..6 years, got {interval!r}")
    return errors


def validate_inputs(room: RoomDimensions, requirements: LightingRequirements, mount_clearance: float = 0.1) -> None:
    errors = _validate_room(room, mount_clearance) + _validate_requirements(requirements)
    if errors:
        raise LightingInputError(errors)
