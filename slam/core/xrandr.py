"""xrandr display backend.

Reads the outputs and their modes from plain ``xrandr`` output and applies
layouts with a single ``xrandr --output ...`` invocation.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from . import cmd
from ..models.screen import OutputModes

logger = logging.getLogger(__name__)

_OUTPUT_HEADER = re.compile(r"^(\S+) (connected|disconnected)\b")
_MODE_LINE = re.compile(r"^\s+(\d+x\d+)\s+(.*)$")
_RATE = re.compile(r"\d+\.\d+")


@dataclass
class OutputInfo:
    """One output header of ``xrandr`` and the mode lines below it."""

    name: str
    connected: bool
    capabilities: List[str] = field(default_factory=list)

    def capability_text(self) -> str:
        """Capabilities as ``<resolution> <rate>`` lines."""
        return "".join(f"{line}\n" for line in self.capabilities)


def parse_outputs(text: str) -> List[OutputInfo]:
    """Split ``xrandr`` output into outputs, in the order xrandr lists them.

    Every rate on a mode line becomes one capability line; preferred (``+``)
    and current (``*``) markers are ignored.

    Examples:
        >>> info = parse_outputs("eDP-1 connected\\n   1920x1080 60.02*+ 48.00\\n")[0]
        >>> info.capabilities
        ['1920x1080 60.02', '1920x1080 48.00']
    """
    outputs: List[OutputInfo] = []
    current: Optional[OutputInfo] = None

    for line in text.splitlines():
        header = _OUTPUT_HEADER.match(line)
        if header:
            current = OutputInfo(name=header.group(1), connected=header.group(2) == "connected")
            outputs.append(current)
            continue

        if current is None or not current.connected:
            continue

        mode = _MODE_LINE.match(line)
        if mode:
            resolution = mode.group(1)
            for rate in _RATE.findall(mode.group(2)):
                current.capabilities.append(f"{resolution} {rate}")
        elif not line.startswith((" ", "\t")):
            # Screen summary or another unrecognized top-level line
            current = None

    return outputs


class Xrandr:
    """Display backend driving xrandr."""

    def __init__(
        self,
        bin_path: Optional[Path] = None,
        args: Optional[Sequence[str]] = None,
        runner: Optional[Callable[[List[str], Optional[str]], str]] = None,
        apply_runner: Optional[Callable[[List[str]], None]] = None,
    ):
        """Initialize the backend.

        Args:
            bin_path: xrandr executable (default: looked up on PATH)
            args: Arguments passed to every call (e.g. ``--display :1``)
            runner: Callable returning captured stdout of argv
            apply_runner: Callable running argv for its side effects
        """
        self.cmd = cmd.Cmd(bin_path, args or [], "xrandr")
        self._runner = runner or cmd.run_and_fetch_output
        self._apply_runner = apply_runner or cmd.run

    def query(self) -> str:
        return self._runner(self.cmd.argv(), None)

    def list_outputs(self) -> List[OutputInfo]:
        return parse_outputs(self.query())

    def list_connected_outputs(self) -> List[str]:
        return [info.name for info in self.list_outputs() if info.connected]

    def list_disconnected_outputs(self) -> List[str]:
        return [info.name for info in self.list_outputs() if not info.connected]

    def get_output_modes(self) -> Dict[str, OutputModes]:
        """Modes of every connected output that advertises at least one.

        Raises:
            ParseError: If xrandr reports an out-of-range resolution or rate
        """
        output_modes: Dict[str, OutputModes] = {}
        for info in self.list_outputs():
            if not info.connected:
                continue
            modes = OutputModes.parse(info.capability_text())
            if modes.is_empty():
                logger.info(f"Skipping output {info.name}: no usable modes")
                continue
            output_modes[info.name] = modes
        return output_modes

    def apply(self, args: Sequence[str]) -> None:
        """Run xrandr once with the full argument list."""
        argv = self.cmd.argv(*args)
        logger.info(f"Applying: {cmd.format_command(argv)}")
        self._apply_runner(argv)
