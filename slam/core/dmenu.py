"""dmenu-based picker.

Options are written to dmenu's standard input, one per line, and the
selected (or typed) line is read back from its standard output. An empty
answer means the user dismissed the menu and is reported as
EmptyPickerOutputError, the cancellation signal of the whole program.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from . import cmd
from ..errors import EmptyOutputError, EmptyPickerOutputError, InvalidPickerOutputError

logger = logging.getLogger(__name__)

DEFAULT_ARGS = ["-l", "5", "-p"]
YES = "Yes"
NO = "No"

Runner = Callable[[List[str], Optional[str]], str]


class Message:
    """Options offered by one menu round and the prompt shown above them."""

    def __init__(self, options: Sequence[str], prompt: str):
        self.options: List[str] = list(options)
        self.prompt = prompt

    def contains(self, choice: str) -> bool:
        return choice in self.options

    def __repr__(self) -> str:
        return f"Message(prompt={self.prompt!r}, options={self.options!r})"


class Dmenu:
    """Picker backed by dmenu (or any program with the same contract)."""

    def __init__(
        self,
        bin_path: Optional[Path] = None,
        args: Optional[Sequence[str]] = None,
        runner: Optional[Runner] = None,
    ):
        """Initialize the picker.

        Args:
            bin_path: dmenu executable (default: looked up on PATH)
            args: Arguments placed before the prompt text; the last one must
                be the prompt flag (default: ``-l 5 -p``)
            runner: Callable executing argv with stdin text and returning
                stripped stdout (default: cmd.run_and_fetch_output)
        """
        self.cmd = cmd.Cmd(bin_path, args if args is not None else DEFAULT_ARGS, "dmenu")
        self._runner = runner or cmd.run_and_fetch_output

    def to_argv(self, message: Message) -> List[str]:
        return self.cmd.argv(message.prompt)

    def fetch(self, message: Message, validate_output: bool) -> str:
        """Show one menu round.

        Raises:
            EmptyPickerOutputError: If the menu was dismissed
            InvalidPickerOutputError: If validate_output is set and the answer
                is not one of the offered options
        """
        try:
            output = self._runner(self.to_argv(message), "\n".join(message.options))
        except EmptyOutputError:
            raise EmptyPickerOutputError(message.prompt) from None

        if validate_output and not message.contains(output):
            raise InvalidPickerOutputError(output)
        return output

    def choose(self, message: Message) -> str:
        """Ask until the answer is one of the offered options."""
        while True:
            try:
                return self.fetch(message, validate_output=True)
            except InvalidPickerOutputError as e:
                logger.debug(f"Re-prompting '{message.prompt}' after unmatched answer: {e.answer}")

    def ask(self, message: Message) -> str:
        """Free-text question; options are only suggestions."""
        return self.fetch(message, validate_output=False)

    def notify(self, text: str) -> None:
        """Show a message. Whatever the user answers, including nothing, continues."""
        try:
            self.fetch(Message([], text), validate_output=False)
        except EmptyPickerOutputError:
            logger.debug(f"Notice dismissed: {text}")

    def confirm(self, question: str) -> bool:
        return self.choose(Message([NO, YES], question)) == YES
