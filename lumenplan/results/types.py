from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


EFFICIENCY_RATINGS = ("Excellent", "Very Good", "Good", "Average", "Poor")


@dataclass(frozen=True)
class Layout:
    rows: int
    columns: int
    length_spacing: float
    width_spacing: float


@dataclass(frozen=True)
class IlluminanceDistribution:
    average: float
    minimum: float
    maximum: float
    uniformity: float


@dataclass(frozen=True)
class EnergyMetrics:
    total_power: float  # W
    power_density: float  # W/m²
    efficiency_rating: str
    watts_per_lamp: float = 0.0
    fixture_label: Optional[str] = None


@dataclass(frozen=True)
class BillOfMaterialsItem:
    name: str
    quantity: float
    unit: str
    description: Optional[str] = None


@dataclass(frozen=True)
class LampPosition:
    x: float
    y: float
    z: float

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class IlluminanceGridPoint:
    x: float
    y: float
    illuminance: float


@dataclass(frozen=True)
class LightingResults:
    """Headline numbers of one lumen-method run. Never mutated after creation."""
    number_of_lamps: int
    room_cavity_ratio: float
    coefficient_of_utilization: float
    maintenance_factor: float
    layout: Layout
    illuminance_distribution: IlluminanceDistribution
    energy_metrics: EnergyMetrics
    bill_of_materials: Tuple[BillOfMaterialsItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["bill_of_materials"] = [asdict(item) for item in self.bill_of_materials]
        return d

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LightingResults":
        return LightingResults(
            number_of_lamps=int(d["number_of_lamps"]),
            room_cavity_ratio=float(d["room_cavity_ratio"]),
            coefficient_of_utilization=float(d["coefficient_of_utilization"]),
            maintenance_factor=float(d["maintenance_factor"]),
            layout=Layout(**d["layout"]),
            illuminance_distribution=IlluminanceDistribution(**d["illuminance_distribution"]),
            energy_metrics=EnergyMetrics(**d["energy_metrics"]),
            bill_of_materials=tuple(BillOfMaterialsItem(**item) for item in d.get("bill_of_materials", [])),
        )


@dataclass(frozen=True)
class LightingComputation:
    results: LightingResults
    lamp_positions: Tuple[LampPosition, ...]
    illuminance_grid: Tuple[IlluminanceGridPoint, ...]
    grid_size: int = 20

    @property
    def illuminance_array(self) -> np.ndarray:
        """Grid values as an array indexed [i, j] with x varying along i."""
        values = np.array([p.illuminance for p in self.illuminance_grid], dtype=float)
        if values.size == 0:
            return values
        return values.reshape(self.grid_size, self.grid_size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": self.results.to_dict(),
            "lamp_positions": [asdict(p) for p in self.lamp_positions],
            "illuminance_grid": [asdict(p) for p in self.illuminance_grid],
        }


def positions_as_array(positions: List[LampPosition]) -> np.ndarray:
    if not positions:
        return np.zeros((0, 3), dtype=float)
    return np.array([p.to_tuple() for p in positions], dtype=float)
