"""Unit tests for the dmenu picker."""

from pathlib import Path

import pytest

from slam.core.dmenu import Dmenu, Message
from slam.errors import EmptyPickerOutputError, InvalidPickerOutputError

DMENU_BIN = Path("/usr/bin/dmenu")


def test_argv_ends_with_prompt(dmenu):
    assert dmenu.to_argv(Message(["a"], "Choose state:")) == [
        str(DMENU_BIN), "-l", "5", "-p", "Choose state:",
    ]


def test_custom_args(picker):
    picker.answers = ["b"]
    custom = Dmenu(DMENU_BIN, args=["-i", "-p"], runner=picker)

    assert custom.choose(Message(["a", "b"], "Pick")) == "b"
    assert custom.to_argv(Message([], "Pick")) == [str(DMENU_BIN), "-i", "-p", "Pick"]


def test_options_are_sent_one_per_line(dmenu, picker):
    picker.answers = ["Right of"]

    assert dmenu.choose(Message(["Center", "Right of"], "Choose position:")) == "Right of"
    assert picker.calls == [("Choose position:", ["Center", "Right of"])]


def test_choose_repeats_until_answer_matches(dmenu, picker):
    picker.answers = ["Sideways", "Above"]

    assert dmenu.choose(Message(["Center", "Above"], "Choose position:")) == "Above"
    assert picker.prompts() == ["Choose position:", "Choose position:"]


def test_fetch_with_validation_rejects_unknown_answer(dmenu, picker):
    picker.answers = ["Sideways"]

    with pytest.raises(InvalidPickerOutputError) as exc_info:
        dmenu.fetch(Message(["Center"], "Choose position:"), validate_output=True)
    assert exc_info.value.answer == "Sideways"


def test_ask_accepts_free_text(dmenu, picker):
    picker.answers = ["office"]

    assert dmenu.ask(Message(["home"], "Name?")) == "office"


def test_dismissed_menu_aborts(dmenu, picker):
    picker.answers = [""]

    with pytest.raises(EmptyPickerOutputError):
        dmenu.choose(Message(["a"], "Pick"))


def test_notify_tolerates_dismissal(dmenu, picker):
    picker.answers = [""]

    dmenu.notify("Nothing to do")
    assert picker.calls == [("Nothing to do", [])]


def test_notify_ignores_answer(dmenu, picker):
    picker.answers = ["whatever"]

    dmenu.notify("Nothing to do")


@pytest.mark.parametrize("answer,expected", [("Yes", True), ("No", False)])
def test_confirm(dmenu, picker, answer, expected):
    picker.answers = [answer]

    assert dmenu.confirm("Continue?") is expected
    assert picker.options_for("Continue?") == ["No", "Yes"]


def test_message_contains():
    message = Message(["Yes", "No"], "Sure?")
    assert message.contains("Yes")
    assert not message.contains("yes")
