"""Unit tests for rich output formatting."""

from rich.console import Console

from slam.cli.formatters import format_layout_table, format_output
from slam.models.screen import Orientation


def test_format_output_normal_orientation_is_omitted(dual_layout):
    assert format_output(dual_layout.get("eDP-1")) == "eDP-1 1920x1080@60 (primary)"
    assert format_output(dual_layout.get("HDMI-1")) == "HDMI-1 1280x720@50 right-of eDP-1"


def test_format_output_rotation(dual_layout):
    hdmi = dual_layout.get("HDMI-1")
    hdmi.orientation = Orientation.LEFT

    assert format_output(hdmi) == "HDMI-1 1280x720@50 right-of eDP-1 rotate left"


def test_format_output_mirror_and_off(mirror_layout, dual_layout):
    assert format_output(mirror_layout.get("HDMI-1")) == "HDMI-1 1920x1080@60 same-as eDP-1"
    assert format_output(dual_layout.get("DP-1")) == "DP-1 off"


def test_layout_table(dual_layout, mirror_layout):
    dual_layout.is_current = True
    console = Console(width=120, record=True)

    console.print(format_layout_table([dual_layout, mirror_layout]))
    text = console.export_text()

    assert "dual" in text
    assert "mirror" in text
    assert "✓" in text
