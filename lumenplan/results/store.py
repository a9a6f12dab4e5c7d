from __future__ import annotations

import hashlib
import json
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from lumenplan.models.room import LightingRequirements, RoomDimensions
from lumenplan.results.types import IlluminanceGridPoint, LightingResults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationRecord:
    """A saved calculation: name, inputs and results, owned by one user."""
    id: str
    user_id: str
    name: str
    room_dimensions: RoomDimensions
    lighting_requirements: LightingRequirements
    results: LightingResults
    input_hash: str
    created_at: str
    updated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "room_dimensions": self.room_dimensions.to_dict(),
            "lighting_requirements": self.lighting_requirements.to_dict(),
            "results": self.results.to_dict(),
            "input_hash": self.input_hash,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "CalculationRecord":
        return CalculationRecord(
            id=str(d["id"]),
            user_id=str(d["user_id"]),
            name=str(d["name"]),
            room_dimensions=RoomDimensions.from_dict(d["room_dimensions"]),
            lighting_requirements=LightingRequirements.from_dict(d["lighting_requirements"]),
            results=LightingResults.from_dict(d["results"]),
            input_hash=str(d.get("input_hash", "")),
            created_at=str(d["created_at"]),
            updated_at=str(d.get("updated_at", d["created_at"])),
        )


def _hashable(value: Any) -> Any:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot hash non-finite input value {value!r}")
        return float(f"{value:.12g}")
    return value


def hash_calculation_inputs(room: RoomDimensions, requirements: LightingRequirements) -> str:
    """SHA-256 of the inputs in canonical JSON; floats trimmed to 12 significant digits."""
    payload = {
        "room_dimensions": {k: _hashable(v) for k, v in room.to_dict().items()},
        "lighting_requirements": {k: _hashable(v) for k, v in requirements.to_dict().items()},
    }
    text = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CalculationStore:
    """Saved calculations kept in a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return list(data.get("calculations", []))

    def _save(self, rows: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps({"calculations": rows}, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)

    def create(
        self,
        user_id: str,
        name: str,
        room: RoomDimensions,
        requirements: LightingRequirements,
        results: LightingResults,
    ) -> CalculationRecord:
        if not str(name).strip():
            raise ValueError("Calculation name is required")
        if not str(user_id).strip():
            raise ValueError("User id is required")
        now = _now()
        record = CalculationRecord(
            id=str(uuid.uuid4()),
            user_id=str(user_id),
            name=str(name).strip(),
            room_dimensions=room,
            lighting_requirements=requirements,
            results=results,
            input_hash=hash_calculation_inputs(room, requirements),
            created_at=now,
            updated_at=now,
        )
        rows = self._load()
        rows.append(record.to_dict())
        self._save(rows)
        logger.info("Saved calculation %s (%s) for user %s", record.id, record.name, record.user_id)
        return record

    def get(self, calculation_id: str) -> CalculationRecord:
        for row in self._load():
            if row.get("id") == calculation_id:
                return CalculationRecord.from_dict(row)
        raise KeyError(f"Calculation not found: {calculation_id}")

    def list_all(self) -> List[CalculationRecord]:
        return [CalculationRecord.from_dict(r) for r in self._load()]

    def list_by_user(self, user_id: str) -> List[CalculationRecord]:
        return [CalculationRecord.from_dict(r) for r in self._load() if r.get("user_id") == user_id]

    def rename(self, calculation_id: str, name: str, user_id: Optional[str] = None) -> CalculationRecord:
        if not str(name).strip():
            raise ValueError("Calculation name is required")
        rows = self._load()
        for i, row in enumerate(rows):
            if row.get("id") != calculation_id:
                continue
            if user_id is not None and row.get("user_id") != user_id:
                raise PermissionError(f"Calculation {calculation_id} belongs to another user")
            row = dict(row, name=str(name).strip(), updated_at=_now())
            rows[i] = row
            self._save(rows)
            return CalculationRecord.from_dict(row)
        raise KeyError(f"Calculation not found: {calculation_id}")

    def delete(self, calculation_id: str, user_id: Optional[str] = None) -> None:
        rows = self._load()
        for i, row in enumerate(rows):
            if row.get("id") != calculation_id:
                continue
            if user_id is not None and row.get("user_id") != user_id:
                raise PermissionError(f"Calculation {calculation_id} belongs to another user")
            del rows[i]
            self._save(rows)
            logger.info("Deleted calculation %s", calculation_id)
            return
        raise KeyError(f"Calculation not found: {calculation_id}")


def write_grid_csv(out_path: Union[str, Path], grid: List[IlluminanceGridPoint]) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    data = np.array([[p.x, p.y, p.illuminance] for p in grid], dtype=float).reshape(-1, 3)
    np.savetxt(out_path, data, delimiter=",", header="x,y,illuminance", comments="")
    return out_path
