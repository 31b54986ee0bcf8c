"""Layout wizard.

Walks the user through a fixed sequence of menus to build a Layout:

1. Name selection (restarts on an empty name or a declined overwrite)
2. For each output the user picks: state, then resolution, rate and
   orientation unless disconnected, then position when connected, then
   the primary flag while no output has taken it
3. Outputs the user never touched, and outputs that are physically
   disconnected, are added switched off

Dismissing any menu raises EmptyPickerOutputError, which is left for the
caller to handle.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models.screen import (
    POSITION_LABELS,
    STATE_LABELS,
    Layout,
    Mode,
    Orientation,
    Output,
    OutputModes,
    Position,
    PositionKind,
    Rate,
    Resolution,
    State,
    StateKind,
)
from .config import LayoutConfig, strip_marker
from .dmenu import Dmenu, Message
from .xrandr import Xrandr

logger = logging.getLogger(__name__)


@dataclass
class BuildSession:
    """State of one wizard run.

    Attributes:
        output_modes: Outputs not yet configured and their modes
        connected_outputs: Every connected output when the run started
        relative_outputs: Output name -> output it was positioned against
        is_primary_selected: Whether an output was already made primary
    """

    output_modes: Dict[str, OutputModes]
    connected_outputs: List[str]
    relative_outputs: Dict[str, str] = field(default_factory=dict)
    is_primary_selected: bool = False

    @classmethod
    def start(cls, output_modes: Dict[str, OutputModes]) -> "BuildSession":
        return cls(output_modes=dict(output_modes), connected_outputs=list(output_modes))

    def other_outputs(self, output_name: str) -> List[str]:
        return [name for name in self.connected_outputs if name != output_name]


class LayoutBuilder:
    """Builds layouts interactively and stores them in the catalog."""

    def __init__(self, dmenu: Dmenu, xrandr: Xrandr, config: LayoutConfig):
        self.dmenu = dmenu
        self.xrandr = xrandr
        self.config = config

    # ------------------------------------------------------------------
    # Whole run
    # ------------------------------------------------------------------

    def create_layout(self) -> Optional[Layout]:
        """Build a layout, save it, and offer to apply it right away.

        Returns:
            The saved layout, or None if nothing was created
        """
        layout = self.build()
        if layout is None:
            return None

        self.config.add(layout)
        if self.does_apply_new_layout():
            self.config.apply(layout.name, self.xrandr)
        return layout

    def build(self) -> Optional[Layout]:
        """Run the menus and return the finished layout without saving it."""
        output_modes = self.xrandr.get_output_modes()
        if not output_modes:
            self.dmenu.notify("You don't have any monitors connected.")
            return None

        session = BuildSession.start(output_modes)
        layout = Layout(name=self.select_layout_name())

        while True:
            output = self.build_output(session, layout)
            session.output_modes.pop(output.name)
            layout.add(output)
            logger.debug(f"Configured output {output.name}: {output.to_xrandr_args()}")

            if not session.output_modes or not self.does_add_another_screen():
                break

        if layout.is_empty():
            return None

        self.finalize(layout, session)
        return layout

    def finalize(self, layout: Layout, session: BuildSession) -> None:
        """Switch off every output the layout does not mention yet.

        Duplicated outputs whose mirrored output ends up switched off are
        kept as chosen and reported with a warning.
        """
        untouched = list(session.output_modes)
        for output_name in untouched + self.xrandr.list_disconnected_outputs():
            if layout.get(output_name) is None:
                layout.add(Output.disconnected(output_name))

        for output in layout.outputs.values():
            if output.state.kind is not StateKind.DUPLICATED:
                continue
            mirrored = layout.get(output.state.output)
            if mirrored is None or mirrored.is_disconnected:
                logger.warning(
                    f"Output {output.name} mirrors {output.state.output}, "
                    f"which is switched off in layout '{layout.name}'"
                )

    def build_output(self, session: BuildSession, layout: Layout) -> Output:
        """Collect the settings of one output."""
        output = Output(name=self.select_output_name(list(session.output_modes)))
        output.state = self.select_state(session.other_outputs(output.name))

        if output.is_disconnected:
            return output

        modes = session.output_modes[output.name]
        output.mode = Mode(
            resolution=self.select_resolution(modes),
            rate=self.select_rate(modes),
        )
        output.orientation = self.select_orientation()

        if output.state.kind is StateKind.CONNECTED:
            candidates = self.position_candidates(session, layout, output.name)
            output.position = self.select_position(candidates)
            if output.position.output is not None:
                session.relative_outputs[output.name] = output.position.output

        if not session.is_primary_selected and self.does_make_output_primary(output.name):
            output.is_primary = True
            session.is_primary_selected = True

        return output

    @staticmethod
    def position_candidates(session: BuildSession, layout: Layout, output_name: str) -> List[str]:
        """Outputs the current one may be positioned against.

        A candidate is already placed in the layout and switched on, and is
        not itself positioned against some output other than the current one.
        """
        return [
            name
            for name, placed in layout.outputs.items()
            if name != output_name
            and not placed.is_disconnected
            and session.relative_outputs.get(name, output_name) == output_name
        ]

    # ------------------------------------------------------------------
    # Single menus
    # ------------------------------------------------------------------

    def select_layout_name(self) -> str:
        while True:
            answer = self.dmenu.ask(Message(
                self.config.layout_names(),
                "What is the name of a new layout? (created are listed below)",
            ))
            name = strip_marker(answer).strip()

            if not name:
                self.layout_name_should_not_be_empty()
                continue
            if self.config.get(name) is not None and not self.does_override_existing_layout(name):
                continue
            return name

    def select_output_name(self, output_names: List[str]) -> str:
        return self.dmenu.choose(Message(output_names, "What screen to connect?"))

    def select_state(self, other_outputs: List[str]) -> State:
        duplicated = STATE_LABELS.label_of(StateKind.DUPLICATED)
        states = [label for label in State.labels() if other_outputs or label != duplicated]

        label = self.dmenu.choose(Message(states, "Choose state:"))
        duplicated_output = None
        if label == duplicated:
            duplicated_output = self.dmenu.choose(Message(other_outputs, "Choose duplicated screen:"))
        return State.from_label(label, duplicated_output)

    def select_resolution(self, modes: OutputModes) -> Resolution:
        return Resolution.parse(
            self.dmenu.choose(Message(modes.resolution_labels(), "Choose resolution:"))
        )

    def select_rate(self, modes: OutputModes) -> Rate:
        return Rate.parse(self.dmenu.choose(Message(modes.rate_labels(), "Choose rate:")))

    def select_orientation(self) -> Orientation:
        return Orientation.from_label(
            self.dmenu.choose(Message(Orientation.labels(), "Choose orientation:"))
        )

    def select_position(self, candidates: List[str]) -> Position:
        center = POSITION_LABELS.label_of(PositionKind.CENTER)
        positions = Position.labels() if candidates else [center]

        label = self.dmenu.choose(Message(positions, "Choose position:"))
        relative_output = None
        if label != center:
            relative_output = self.dmenu.choose(Message(candidates, "Choose relative screen:"))
        return Position.from_label(label, relative_output)

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def layout_name_should_not_be_empty(self) -> None:
        self.dmenu.notify("Layout name should not be empty string (press any key to continue)")

    def does_override_existing_layout(self, layout_name: str) -> bool:
        return self.dmenu.confirm(
            f"Do you really want to overwrite existing layout: `{layout_name}`?"
        )

    def does_make_output_primary(self, output_name: str) -> bool:
        return self.dmenu.confirm(f"Make screen {output_name} primary? (only once)")

    def does_add_another_screen(self) -> bool:
        return self.dmenu.confirm("Add another screen?")

    def does_apply_new_layout(self) -> bool:
        return self.dmenu.confirm("Apply new layout?")
