"""
Data models for screens, display modes and layouts.

These models use Pydantic for validation. Resolution, Rate and Mode are
frozen value objects produced by parsing xrandr capability text; Output and
Layout are assembled field by field by the layout wizard and persisted in the
layout catalog.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from functools import total_ordering
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import (
    InvalidRateError,
    InvalidResolutionError,
    MissingReferenceError,
)
from .labels import LabelRegistry

MAX_DIMENSION = 65535

_RESOLUTION_PATTERN = re.compile(r"(\d+)x(\d+)", re.ASCII)
_MODE_LINE_PATTERN = re.compile(r"(\d+x\d+)\s+(\d+(?:\.\d+)?)", re.ASCII)


@total_ordering
class Resolution(BaseModel):
    """Screen resolution, written as ``HxW``.

    Ordered by height, then width.

    Examples:
        >>> str(Resolution.parse("1920x1080"))
        '1920x1080'
        >>> Resolution.parse("1280x720") < Resolution.parse("1920x1080")
        True
    """

    model_config = ConfigDict(frozen=True)

    height: int = Field(default=0, ge=0, le=MAX_DIMENSION)
    width: int = Field(default=0, ge=0, le=MAX_DIMENSION)

    @classmethod
    def parse(cls, text: str) -> "Resolution":
        """Parse ``HxW`` text.

        Raises:
            InvalidResolutionError: Unless text is exactly two positive
                integers (at most 65535) joined by ``x``
        """
        match = _RESOLUTION_PATTERN.fullmatch(text)
        if not match:
            raise InvalidResolutionError(text)

        height, width = int(match.group(1)), int(match.group(2))
        if not (0 < height <= MAX_DIMENSION and 0 < width <= MAX_DIMENSION):
            raise InvalidResolutionError(text)

        return cls(height=height, width=width)

    def __str__(self) -> str:
        return f"{self.height}x{self.width}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Resolution):
            return NotImplemented
        return (self.height, self.width) < (other.height, other.width)


@total_ordering
class Rate(BaseModel):
    """Refresh rate in whole Hz.

    Examples:
        >>> Rate.parse("59.95").value
        60
        >>> str(Rate.parse("74.97"))
        '75'
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(default=0, ge=0, le=MAX_DIMENSION)

    @classmethod
    def parse(cls, text: str) -> "Rate":
        """Parse a decimal rate, rounding half away from zero.

        Raises:
            InvalidRateError: If text is not a finite decimal in range
        """
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise InvalidRateError(text) from None

        if not number.is_finite():
            raise InvalidRateError(text)

        value = int(number.to_integral_value(rounding=ROUND_HALF_UP))
        if not 0 <= value <= MAX_DIMENSION:
            raise InvalidRateError(text)

        return cls(value=value)

    def __str__(self) -> str:
        return str(self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rate):
            return NotImplemented
        return self.value < other.value


class Mode(BaseModel):
    """One display mode: resolution plus refresh rate."""

    model_config = ConfigDict(frozen=True)

    resolution: Resolution = Field(default_factory=Resolution)
    rate: Rate = Field(default_factory=Rate)

    def to_xrandr_args(self) -> List[str]:
        return ["--mode", str(self.resolution), "--rate", str(self.rate)]


# Enumerations
#
# Enum values are what the layout file stores; labels are what the menu shows.

class PositionKind(str, Enum):
    """Placement of an output. Values double as xrandr flag names."""
    CENTER = "center"
    LEFT_OF = "left-of"
    RIGHT_OF = "right-of"
    ABOVE = "above"
    BELOW = "below"


class StateKind(str, Enum):
    CONNECTED = "connected"
    DUPLICATED = "duplicated"
    DISCONNECTED = "disconnected"


class Orientation(str, Enum):
    """Output rotation. Values are xrandr ``--rotate`` arguments."""
    NORMAL = "normal"
    INVERTED = "inverted"
    LEFT = "left"
    RIGHT = "right"

    @property
    def label(self) -> str:
        return ORIENTATION_LABELS.label_of(self)

    @classmethod
    def from_label(cls, label: str) -> "Orientation":
        return ORIENTATION_LABELS.member_of(label)

    @classmethod
    def labels(cls) -> List[str]:
        return ORIENTATION_LABELS.labels()

    def to_xrandr_args(self) -> List[str]:
        return ["--rotate", self.value]


POSITION_LABELS = LabelRegistry("position", PositionKind, {
    PositionKind.CENTER: "Center",
    PositionKind.LEFT_OF: "Left of",
    PositionKind.RIGHT_OF: "Right of",
    PositionKind.ABOVE: "Above",
    PositionKind.BELOW: "Below",
})

STATE_LABELS = LabelRegistry("state", StateKind, {
    StateKind.CONNECTED: "Connected",
    StateKind.DUPLICATED: "Duplicated",
    StateKind.DISCONNECTED: "Disconnected",
})

ORIENTATION_LABELS = LabelRegistry("orientation", Orientation, {
    Orientation.NORMAL: "Normal",
    Orientation.INVERTED: "Inverted",
    Orientation.LEFT: "Left",
    Orientation.RIGHT: "Right",
})


class Position(BaseModel):
    """Where an output sits: centered, or next to another output."""

    model_config = ConfigDict(frozen=True)

    kind: PositionKind = PositionKind.CENTER
    output: Optional[str] = Field(default=None, description="Reference output name")

    @model_validator(mode="after")
    def validate_reference(self):
        """Only Center goes without a reference output."""
        if self.kind is PositionKind.CENTER:
            if self.output is not None:
                raise ValueError("Center position takes no reference output")
        elif not self.output:
            raise ValueError(f"Position '{self.label}' requires a reference output")
        return self

    @classmethod
    def from_label(cls, label: str, relative_output: Optional[str] = None) -> "Position":
        """Build a position from its menu label.

        Raises:
            UnknownLabelError: If label is not a position label
            MissingReferenceError: If a relative position has no output
        """
        kind = POSITION_LABELS.member_of(label)
        if kind is PositionKind.CENTER:
            return cls()
        if not relative_output:
            raise MissingReferenceError("position", label)
        return cls(kind=kind, output=relative_output)

    @classmethod
    def labels(cls) -> List[str]:
        return POSITION_LABELS.labels()

    @property
    def label(self) -> str:
        return POSITION_LABELS.label_of(self.kind)

    def to_xrandr_args(self) -> List[str]:
        if self.kind is PositionKind.CENTER:
            return []
        return [f"--{self.kind.value}", self.output]

    def __str__(self) -> str:
        return self.label


class State(BaseModel):
    """Whether an output is on, mirroring another output, or off."""

    model_config = ConfigDict(frozen=True)

    kind: StateKind = StateKind.CONNECTED
    output: Optional[str] = Field(default=None, description="Mirrored output name")

    @model_validator(mode="after")
    def validate_reference(self):
        if self.kind is StateKind.DUPLICATED:
            if not self.output:
                raise ValueError("Duplicated state requires a reference output")
        elif self.output is not None:
            raise ValueError(f"State '{self.label}' takes no reference output")
        return self

    @classmethod
    def from_label(cls, label: str, duplicated_output: Optional[str] = None) -> "State":
        """Build a state from its menu label.

        Raises:
            UnknownLabelError: If label is not a state label
            MissingReferenceError: If Duplicated has no output
        """
        kind = STATE_LABELS.member_of(label)
        if kind is not StateKind.DUPLICATED:
            return cls(kind=kind)
        if not duplicated_output:
            raise MissingReferenceError("state", label)
        return cls(kind=kind, output=duplicated_output)

    @classmethod
    def labels(cls) -> List[str]:
        return STATE_LABELS.labels()

    @property
    def label(self) -> str:
        return STATE_LABELS.label_of(self.kind)

    def to_xrandr_args(self) -> List[str]:
        if self.kind is StateKind.DISCONNECTED:
            return ["--off"]
        if self.kind is StateKind.DUPLICATED:
            return ["--same-as", self.output]
        return []

    def __str__(self) -> str:
        return self.label


class Output(BaseModel):
    """Full configuration of one physical output inside a layout."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., min_length=1, description="xrandr output name")
    mode: Mode = Field(default_factory=Mode)
    is_primary: bool = Field(default=False)
    state: State = Field(default_factory=lambda: State(kind=StateKind.DISCONNECTED))
    position: Position = Field(default_factory=Position)
    orientation: Orientation = Field(default=Orientation.NORMAL)

    @classmethod
    def disconnected(cls, name: str) -> "Output":
        """Default entry for an output the layout keeps switched off."""
        return cls(name=name)

    @property
    def is_disconnected(self) -> bool:
        return self.state.kind is StateKind.DISCONNECTED

    def to_xrandr_args(self) -> List[str]:
        """Render ``--output <name>`` and the flags for this output.

        Examples:
            >>> Output(name="VGA-1").to_xrandr_args()
            ['--output', 'VGA-1', '--off']
        """
        args = ["--output", self.name, *self.state.to_xrandr_args()]
        if self.is_disconnected:
            return args

        args.extend(self.mode.to_xrandr_args())
        args.extend(self.orientation.to_xrandr_args())
        args.extend(self.position.to_xrandr_args())
        if self.is_primary:
            args.append("--primary")
        return args


class Layout(BaseModel):
    """A named arrangement of every output known when it was created."""

    name: str = Field(..., min_length=1, description="Unique layout name")
    outputs: Dict[str, Output] = Field(default_factory=dict)
    is_current: bool = Field(default=False, description="Last applied layout")

    @model_validator(mode="after")
    def validate_outputs(self):
        for key, output in self.outputs.items():
            if key != output.name:
                raise ValueError(f"Output stored under '{key}' is named '{output.name}'")

        primaries = [output.name for output in self.outputs.values() if output.is_primary]
        if len(primaries) > 1:
            raise ValueError(f"Only one output can be primary, got: {', '.join(primaries)}")
        return self

    def is_empty(self) -> bool:
        return not self.outputs

    def add(self, output: Output) -> None:
        """Insert or replace an output.

        Raises:
            ValueError: If output is primary and another output already is
        """
        current = self.primary()
        if output.is_primary and current is not None and current.name != output.name:
            raise ValueError(
                f"Output '{current.name}' is already primary in layout '{self.name}'"
            )
        self.outputs[output.name] = output

    def get(self, output_name: str) -> Optional[Output]:
        return self.outputs.get(output_name)

    def primary(self) -> Optional[Output]:
        return next((output for output in self.outputs.values() if output.is_primary), None)

    def to_xrandr_args(self) -> List[str]:
        """Combined xrandr arguments for every output of the layout."""
        args: List[str] = []
        for output in self.outputs.values():
            args.extend(output.to_xrandr_args())
        return args


@dataclass
class OutputModes:
    """Resolutions and rates advertised by one output.

    Both lists are kept sorted in descending order without duplicates.

    Examples:
        >>> modes = OutputModes.parse("1920x1080 60.00\\n1280x720 75.00\\n")
        >>> modes.resolution_labels(), modes.rate_labels()
        (['1920x1080', '1280x720'], ['75', '60'])
    """

    resolutions: List[Resolution] = field(default_factory=list)
    rates: List[Rate] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "OutputModes":
        """Parse lines of ``<resolution> <rate>``; other lines are ignored.

        Raises:
            InvalidResolutionError: If a matched resolution is out of range
            InvalidRateError: If a matched rate is out of range
        """
        output_modes = cls()
        for line in text.splitlines():
            match = _MODE_LINE_PATTERN.fullmatch(line.strip())
            if match:
                output_modes.add(Resolution.parse(match.group(1)), Rate.parse(match.group(2)))
        output_modes.remove_duplicates()
        return output_modes

    def add(self, resolution: Resolution, rate: Rate) -> None:
        self.resolutions.append(resolution)
        self.rates.append(rate)

    def remove_duplicates(self) -> None:
        self.resolutions = sorted(set(self.resolutions), reverse=True)
        self.rates = sorted(set(self.rates), reverse=True)

    def is_empty(self) -> bool:
        """An output needs at least one resolution and one rate to be usable."""
        return not self.resolutions or not self.rates

    def resolution_labels(self) -> List[str]:
        return [str(resolution) for resolution in self.resolutions]

    def rate_labels(self) -> List[str]:
        return [str(rate) for rate in self.rates]
