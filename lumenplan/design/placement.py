from __future__ import annotations

import math
from typing import List

from lumenplan.models.room import RoomDimensions
from lumenplan.results.types import LampPosition, Layout


MOUNT_CLEARANCE_M = 0.1


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def solve_layout(number_of_lamps: int, room_length: float, room_width: float) -> Layout:
    """
    Fit `number_of_lamps` into a rows × columns grid following the room aspect.

    Columns run along the room length, rows along the width. The seed grid is
    grown one row or column at a time until it holds every fixture: whenever
    columns/rows falls short of the room aspect a column is added, otherwise
    a row. Greedy, not an optimal packing.
    """
    n = max(1, int(number_of_lamps))
    aspect = room_length / room_width

    columns = max(1, _round_half_up(math.sqrt(n * aspect)))
    rows = max(1, _round_half_up(n / columns))

    while rows * columns < n:
        if columns / rows < aspect:
            columns += 1
        else:
            rows += 1

    return Layout(
        rows=rows,
        columns=columns,
        length_spacing=room_length / columns,
        width_spacing=room_width / rows,
    )


def generate_lamp_positions(
    layout: Layout,
    room: RoomDimensions,
    number_of_lamps: int,
    mount_clearance: float = MOUNT_CLEARANCE_M,
) -> List[LampPosition]:
    """
    Centered grid, filled row by row.

    Stops as soon as `number_of_lamps` positions exist, so when the grid has
    spare capacity the last row is only partly populated. No rebalancing.
    """
    length_offset = (room.length - (layout.columns - 1) * layout.length_spacing) / 2.0
    width_offset = (room.width - (layout.rows - 1) * layout.width_spacing) / 2.0
    z = room.height - float(mount_clearance)

    out: List[LampPosition] = []
    for row in range(layout.rows):
        for col in range(layout.columns):
            if len(out) >= number_of_lamps:
                return out
            out.append(
                LampPosition(
                    x=length_offset + col * layout.length_spacing,
                    y=width_offset + row * layout.width_spacing,
                    z=z,
                )
            )
    return out
