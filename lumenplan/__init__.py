"""
Lumenplan

Lumen-method lighting calculations: fixture count, layout, illuminance
estimates, energy metrics and a bill of materials for a rectangular room.
"""

from lumenplan.models.room import ContaminationLevel, LightingRequirements, RoomDimensions
from lumenplan.project.validator import LightingInputError
from lumenplan.results.types import LightingComputation, LightingResults
from lumenplan.runner import compute_lighting

__all__ = [
    "ContaminationLevel",
    "LightingRequirements",
    "RoomDimensions",
    "LightingInputError",
    "LightingComputation",
    "LightingResults",
    "compute_lighting",
]

__version__ = "0.1.0"
