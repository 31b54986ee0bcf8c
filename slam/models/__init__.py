# Data models for screens, modes and layouts

from .labels import LabelRegistry
from .screen import (
    Resolution,
    Rate,
    Mode,
    PositionKind,
    Position,
    StateKind,
    State,
    Orientation,
    Output,
    Layout,
    OutputModes,
)
from .settings import SlamSettings

__all__ = [
    "LabelRegistry",
    "Resolution",
    "Rate",
    "Mode",
    "PositionKind",
    "Position",
    "StateKind",
    "State",
    "Orientation",
    "Output",
    "Layout",
    "OutputModes",
    "SlamSettings",
]
