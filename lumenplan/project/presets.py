from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from lumenplan.models.room import ContaminationLevel, LightingRequirements, RoomDimensions


@dataclass(frozen=True)
class RoomTypePreset:
    key: str
    label: str
    recommended_lux: float


ROOM_TYPES: List[RoomTypePreset] = [
    RoomTypePreset("office", "Office", 500.0),
    RoomTypePreset("classroom", "Classroom", 500.0),
    RoomTypePreset("conference", "Conference Room", 500.0),
    RoomTypePreset("corridor", "Corridor", 100.0),
    RoomTypePreset("kitchen", "Kitchen", 500.0),
    RoomTypePreset("bathroom", "Bathroom", 200.0),
    RoomTypePreset("bedroom", "Bedroom", 150.0),
    RoomTypePreset("living", "Living Room", 200.0),
    RoomTypePreset("warehouse", "Warehouse", 200.0),
    RoomTypePreset("industry", "Industrial Area", 750.0),
]


CONTAMINATION_DESCRIPTIONS: Dict[ContaminationLevel, str] = {
    ContaminationLevel.VERY_CLEAN: "Environments with minimal dust or dirt (e.g., clean rooms, specialized labs)",
    ContaminationLevel.CLEAN: "Well-maintained environments with regular cleaning (e.g., offices, homes)",
    ContaminationLevel.NORMAL: "Standard environments with typical dust levels (e.g., classrooms, retail spaces)",
    ContaminationLevel.DIRTY: "Environments with high dust levels (e.g., industrial spaces, workshops)",
}


def default_room() -> RoomDimensions:
    return RoomDimensions(length=10.0, width=8.0, height=3.0, workplane_height=0.85)


def default_requirements() -> LightingRequirements:
    return LightingRequirements(
        target_illuminance=500.0,
        flux_per_lamp=3600.0,
        contamination_level=ContaminationLevel.NORMAL,
        maintenance_interval=2,
        ceiling_reflectance=0.7,
        wall_reflectance=0.5,
    )


def room_type(key: str) -> RoomTypePreset:
    for preset in ROOM_TYPES:
        if preset.key == key:
            return preset
    raise ValueError(f"Unknown room type: {key}")


def recommended_illuminance(key: str) -> float:
    return room_type(key).recommended_lux
