"""Unit tests for parsing output capability text into OutputModes."""

import pytest

from slam.errors import InvalidResolutionError
from slam.models.screen import OutputModes, Rate, Resolution


def test_parse_deduplicates_and_sorts_descending():
    modes = OutputModes.parse("1920x1080 60.00\n1920x1080 60.00\n1280x720 75.00\n")

    assert modes.resolution_labels() == ["1920x1080", "1280x720"]
    assert modes.rate_labels() == ["75", "60"]


def test_parse_rounds_rates_before_deduplicating():
    modes = OutputModes.parse("1920x1080 59.94\n1920x1080 60.02\n1920x1080 50.00\n")

    assert modes.rate_labels() == ["60", "50"]


def test_parse_ignores_unrelated_lines():
    text = "\n".join([
        "Screen 0: minimum 320 x 200",
        "   1920x1080   60.00   ",
        "garbage",
        "1920x1080i 60.00",
        "",
        "1280x720 50",
    ])
    modes = OutputModes.parse(text)

    assert modes.resolution_labels() == ["1920x1080", "1280x720"]
    assert modes.rate_labels() == ["60", "50"]


def test_parse_empty_text():
    modes = OutputModes.parse("")
    assert modes.is_empty()
    assert modes.resolution_labels() == []


def test_parse_out_of_range_resolution_fails():
    with pytest.raises(InvalidResolutionError):
        OutputModes.parse("0x1080 60.00\n")


def test_is_empty_when_either_list_is_empty():
    modes = OutputModes()
    assert modes.is_empty()

    modes.resolutions.append(Resolution(height=1920, width=1080))
    assert modes.is_empty()

    modes.rates.append(Rate(value=60))
    assert not modes.is_empty()


def test_add_then_remove_duplicates():
    modes = OutputModes()
    modes.add(Resolution(height=1280, width=720), Rate(value=60))
    modes.add(Resolution(height=1920, width=1080), Rate(value=60))
    modes.add(Resolution(height=1280, width=720), Rate(value=144))
    modes.remove_duplicates()

    assert modes.resolution_labels() == ["1920x1080", "1280x720"]
    assert modes.rate_labels() == ["144", "60"]
