"""Running external programs and capturing what they print."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..cli.logging_config import log_subprocess_call
from ..errors import (
    CommandFailedError,
    CommandSpawnError,
    EmptyOutputError,
    ExecutableNotFoundError,
    OutputDecodeError,
)

logger = logging.getLogger(__name__)


def find_executable(name: str) -> Path:
    """Locate name on PATH.

    Raises:
        ExecutableNotFoundError: If name is not installed
    """
    path = shutil.which(name)
    if path is None:
        raise ExecutableNotFoundError(name)
    return Path(path)


def format_command(argv: Sequence[str]) -> str:
    return " ".join(str(part) for part in argv)


def _spawn(argv: Sequence[str], input_bytes: Optional[bytes]) -> subprocess.CompletedProcess:
    try:
        result = subprocess.run(
            [str(part) for part in argv],
            input=input_bytes,
            capture_output=True,
        )
    except OSError as e:
        raise CommandSpawnError(format_command(argv), str(e)) from e
    log_subprocess_call(argv, result, logger)
    return result


def run(argv: Sequence[str]) -> None:
    """Run a command for its side effects.

    Raises:
        CommandSpawnError: If the program cannot be started
        CommandFailedError: If it exits with a non-zero status
    """
    result = _spawn(argv, None)
    if result.returncode != 0:
        raise CommandFailedError(
            format_command(argv),
            result.returncode,
            result.stderr.decode(errors="replace"),
        )


def run_and_fetch_output(argv: Sequence[str], input_text: Optional[str] = None) -> str:
    """Run a command and return its stripped standard output.

    Args:
        argv: Program and arguments
        input_text: Text written to the program's standard input

    Returns:
        Captured stdout without surrounding whitespace

    Raises:
        CommandSpawnError: If the program cannot be started
        OutputDecodeError: If stdout is not valid UTF-8
        EmptyOutputError: If nothing was printed
    """
    input_bytes = input_text.encode() if input_text is not None else None
    result = _spawn(argv, input_bytes)

    try:
        output = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise OutputDecodeError(format_command(argv), str(e)) from e

    if not output.strip():
        raise EmptyOutputError(format_command(argv))
    return output.strip()


class Cmd:
    """Executable path plus fixed leading arguments."""

    def __init__(self, bin_path: Optional[Path], args: Sequence[str], bin_name: str):
        self.bin_path = bin_path if bin_path is not None else find_executable(bin_name)
        self.args: List[str] = list(args)

    def argv(self, *extra: str) -> List[str]:
        return [str(self.bin_path), *self.args, *extra]

    def __str__(self) -> str:
        return format_command(self.argv())
