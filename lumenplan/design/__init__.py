from lumenplan.design.placement import (
    generate_lamp_positions,
    solve_layout,
)

__all__ = [
    "generate_lamp_positions",
    "solve_layout",
]
