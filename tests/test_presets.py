from __future__ import annotations

import pytest

from lumenplan.models.room import ContaminationLevel
from lumenplan.project.presets import CONTAMINATION_DESCRIPTIONS, ROOM_TYPES, recommended_illuminance, room_type


def test_recommended_illuminance_by_room_type() -> None:
    assert recommended_illuminance("office") == 500.0
    assert recommended_illuminance("corridor") == 100.0
    assert recommended_illuminance("industry") == 750.0


def test_unknown_room_type_raises() -> None:
    with pytest.raises(ValueError):
        room_type("dungeon")


def test_room_type_keys_are_unique() -> None:
    keys = [p.key for p in ROOM_TYPES]
    assert len(keys) == len(set(keys)) == 10


def test_every_contamination_level_is_described() -> None:
    assert set(CONTAMINATION_DESCRIPTIONS) == set(ContaminationLevel)
