"""Pytest configuration and shared fixtures for slam tests.

External programs are never started: dmenu and xrandr get scripted runner
callables instead.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from slam.core.config import LayoutConfig
from slam.core.dmenu import Dmenu
from slam.core.xrandr import Xrandr
from slam.errors import EmptyOutputError
from slam.models.screen import (
    Layout,
    Mode,
    Output,
    Position,
    PositionKind,
    Rate,
    Resolution,
    State,
    StateKind,
)


DMENU_BIN = Path("/usr/bin/dmenu")
XRANDR_BIN = Path("/usr/bin/xrandr")

XRANDR_OUTPUT = """\
Screen 0: minimum 320 x 200, current 3840 x 1080, maximum 16384 x 16384
eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 344mm x 194mm
   1920x1080     60.02*+  59.93    48.00
   1680x1050     59.95    59.88
   1280x720      60.00
HDMI-1 connected 1920x1080+1920+0 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+  50.00    59.94
   1280x720      60.00    50.00
   1920x1080i    60.00    50.00
DP-1 disconnected (normal left inverted right x axis y axis)
DP-2 disconnected (normal left inverted right x axis y axis)
"""

class ScriptedPicker:
    """Stands in for dmenu: answers prompts from a fixed script.

    An empty answer behaves like dismissing the menu. Every call is recorded
    as (prompt, options).
    """

    def __init__(self, answers: Optional[List[str]] = None):
        self.answers: List[str] = list(answers or [])
        self.calls: List[Tuple[str, List[str]]] = []

    def __call__(self, argv: List[str], input_text: Optional[str] = None) -> str:
        prompt = argv[-1]
        options = input_text.split("\n") if input_text else []
        self.calls.append((prompt, options))

        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt} {options}")

        answer = self.answers.pop(0)
        if not answer:
            raise EmptyOutputError(" ".join(argv))
        return answer

    def prompts(self) -> List[str]:
        return [prompt for prompt, _ in self.calls]

    def options_for(self, prompt: str) -> List[str]:
        """Options of the last call with the given prompt."""
        for called_prompt, options in reversed(self.calls):
            if called_prompt == prompt:
                return options
        raise KeyError(prompt)


class FakeXrandrRunner:
    """Returns canned xrandr output and records applied argument lists."""

    def __init__(self, output: str = XRANDR_OUTPUT):
        self.output = output
        self.applied: List[List[str]] = []

    def query(self, argv: List[str], input_text: Optional[str] = None) -> str:
        return self.output.strip()

    def apply(self, argv: List[str]) -> None:
        self.applied.append(list(argv))


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path of a not yet existing config file inside a temporary directory."""
    return tmp_path / "slam" / "config.toml"


@pytest.fixture
def layout_config(config_file: Path) -> LayoutConfig:
    return LayoutConfig.load(config_file)


@pytest.fixture
def picker() -> ScriptedPicker:
    return ScriptedPicker()


@pytest.fixture
def dmenu(picker: ScriptedPicker) -> Dmenu:
    return Dmenu(DMENU_BIN, runner=picker)


@pytest.fixture
def xrandr_runner() -> FakeXrandrRunner:
    return FakeXrandrRunner()


@pytest.fixture
def xrandr(xrandr_runner: FakeXrandrRunner) -> Xrandr:
    return Xrandr(XRANDR_BIN, runner=xrandr_runner.query, apply_runner=xrandr_runner.apply)


@pytest.fixture
def dual_layout() -> Layout:
    """eDP-1 primary on the left, HDMI-1 to its right, DP-1 off."""
    layout = Layout(name="dual")
    layout.add(Output(
        name="eDP-1",
        mode=Mode(resolution=Resolution(height=1920, width=1080), rate=Rate(value=60)),
        is_primary=True,
        state=State(kind=StateKind.CONNECTED),
    ))
    layout.add(Output(
        name="HDMI-1",
        mode=Mode(resolution=Resolution(height=1280, width=720), rate=Rate(value=50)),
        state=State(kind=StateKind.CONNECTED),
        position=Position(kind=PositionKind.RIGHT_OF, output="eDP-1"),
    ))
    layout.add(Output.disconnected("DP-1"))
    return layout


@pytest.fixture
def mirror_layout() -> Layout:
    layout = Layout(name="mirror")
    layout.add(Output(
        name="eDP-1",
        mode=Mode(resolution=Resolution(height=1920, width=1080), rate=Rate(value=60)),
        state=State(kind=StateKind.CONNECTED),
    ))
    layout.add(Output(
        name="HDMI-1",
        mode=Mode(resolution=Resolution(height=1920, width=1080), rate=Rate(value=60)),
        state=State(kind=StateKind.DUPLICATED, output="eDP-1"),
    ))
    return layout
