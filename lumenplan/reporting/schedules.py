from __future__ import annotations

import math
from typing import List, Optional

from lumenplan.database.catalog import FixtureRecord
from lumenplan.models.room import RoomDimensions
from lumenplan.results.types import BillOfMaterialsItem, Layout


WIRING_PER_FIXTURE_M = 1.5
MOUNTING_POINTS_PER_FIXTURE = 2
FIXTURES_PER_JUNCTION_BOX = 4


def build_bill_of_materials(
    number_of_lamps: int,
    room: RoomDimensions,
    layout: Layout,
    fixture: Optional[FixtureRecord] = None,
) -> List[BillOfMaterialsItem]:
    """
    Linear estimate of what an installation needs. Not an electrical
    bill of quantities.
    """
    n = int(number_of_lamps)
    fixture_name = fixture.label if fixture is not None else "Light fixture"
    fixture_desc = f"Arranged in {layout.rows} row(s) x {layout.columns} column(s)"
    if fixture is not None and fixture.fixture_type:
        fixture_desc = f"{fixture.fixture_type}, {fixture_desc.lower()}"

    wiring_m = round(room.perimeter + n * WIRING_PER_FIXTURE_M, 2)

    return [
        BillOfMaterialsItem(name=fixture_name, quantity=n, unit="pcs", description=fixture_desc),
        BillOfMaterialsItem(
            name="Electrical wiring",
            quantity=wiring_m,
            unit="m",
            description="Room perimeter plus 1.5 m drop per fixture",
        ),
        BillOfMaterialsItem(name="Mounting points", quantity=n * MOUNTING_POINTS_PER_FIXTURE, unit="pcs"),
        BillOfMaterialsItem(
            name="Junction boxes",
            quantity=int(math.ceil(n / FIXTURES_PER_JUNCTION_BOX)),
            unit="pcs",
            description="One per four fixtures",
        ),
        BillOfMaterialsItem(name="Light switch", quantity=1, unit="pcs"),
        BillOfMaterialsItem(name="Mounting kit", quantity=n, unit="sets", description="One per fixture"),
    ]
