from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Mapping


class ContaminationLevel(str, Enum):
    """How dirty the room gets between maintenance visits."""
    VERY_CLEAN = "very clean"
    CLEAN = "clean"
    NORMAL = "normal"
    DIRTY = "dirty"

    @classmethod
    def parse(cls, value: Any) -> "ContaminationLevel":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("_", " ")
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown contamination level: {value!r}") from None


MAINTENANCE_INTERVALS = (1, 2, 3, 4, 5, 6)


def _pick(d: Mapping[str, Any], snake: str, camel: str) -> Any:
    if snake in d:
        return d[snake]
    if camel in d:
        return d[camel]
    raise KeyError(snake)


@dataclass(frozen=True)
class RoomDimensions:
    """Rectangular room geometry in meters."""
    length: float
    width: float
    height: float
    workplane_height: float

    @property
    def floor_area(self) -> float:
        return self.length * self.width

    @property
    def perimeter(self) -> float:
        return 2.0 * (self.length + self.width)

    @property
    def cavity_height(self) -> float:
        return self.height - self.workplane_height

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "RoomDimensions":
        return RoomDimensions(
            length=float(d["length"]),
            width=float(d["width"]),
            height=float(d["height"]),
            workplane_height=float(_pick(d, "workplane_height", "workplaneHeight")),
        )


@dataclass(frozen=True)
class LightingRequirements:
    """
    Target illuminance and the lamp/room properties that drive the lumen method.

    Attributes:
        target_illuminance: Required maintained illuminance on the workplane (lux)
        flux_per_lamp: Luminous flux of one fixture (lumens)
        contamination_level: One of the four ContaminationLevel values
        maintenance_interval: Years between cleaning/relamping (1..6)
        ceiling_reflectance: 0..1
        wall_reflectance: 0..1
    """
    target_illuminance: float
    flux_per_lamp: float
    contamination_level: ContaminationLevel
    maintenance_interval: int
    ceiling_reflectance: float
    wall_reflectance: float

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["contamination_level"] = ContaminationLevel.parse(self.contamination_level).value
        return d

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "LightingRequirements":
        return LightingRequirements(
            target_illuminance=float(_pick(d, "target_illuminance", "targetIlluminance")),
            flux_per_lamp=float(_pick(d, "flux_per_lamp", "fluxPerLamp")),
            contamination_level=ContaminationLevel.parse(_pick(d, "contamination_level", "contaminationLevel")),
            maintenance_interval=int(_pick(d, "maintenance_interval", "maintenanceInterval")),
            ceiling_reflectance=float(_pick(d, "ceiling_reflectance", "ceilingReflectance")),
            wall_reflectance=float(_pick(d, "wall_reflectance", "wallReflectance")),
        )
