"""
Error handling for the screen layout manager.

Every failure that can reach the command line is a SlamError carrying a
structured code, a human-readable message and an optional recovery hint.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """
    Error codes for slam.

    Ranges:
    - 1000-1099: Parse errors (capability text, menu labels)
    - 1100-1199: Configuration and persistence errors
    - 1200-1299: External command errors
    - 1300-1399: Picker errors
    """

    # Parse errors (1000-1099)
    INVALID_RESOLUTION = 1000
    INVALID_RATE = 1001
    UNKNOWN_LABEL = 1002

    # Configuration errors (1100-1199)
    CONFIG_INVALID = 1100
    CONFIG_READ_FAILED = 1101
    CONFIG_WRITE_FAILED = 1102

    # Command errors (1200-1299)
    EXECUTABLE_NOT_FOUND = 1200
    COMMAND_SPAWN_FAILED = 1201
    COMMAND_FAILED = 1202
    OUTPUT_NOT_UTF8 = 1203
    EMPTY_OUTPUT = 1204

    # Picker errors (1300-1399)
    PICKER_INVALID_OUTPUT = 1300
    PICKER_EMPTY_OUTPUT = 1301


class SlamError(Exception):
    """Base exception for screen layout manager errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to a dictionary for structured output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class ParseError(SlamError):
    """Capability text or a menu label could not be parsed."""


class InvalidResolutionError(ParseError):
    """Resolution text is not two positive integers joined by 'x'."""

    def __init__(self, text: str):
        super().__init__(
            code=ErrorCode.INVALID_RESOLUTION,
            message=f"Invalid resolution: {text}",
            context={"text": text}
        )
        self.text = text


class InvalidRateError(ParseError):
    """Refresh rate text is not a decimal number."""

    def __init__(self, text: str):
        super().__init__(
            code=ErrorCode.INVALID_RATE,
            message=f"Invalid refresh rate: {text}",
            context={"text": text}
        )
        self.text = text


class UnknownLabelError(ParseError):
    """A display label has no registered variant.

    Labels only ever come from menus the program built itself, so this
    signals a programming error rather than bad user input.
    """

    def __init__(self, kind: str, label: str):
        super().__init__(
            code=ErrorCode.UNKNOWN_LABEL,
            message=f"Unexpected {kind}: {label}",
            context={"kind": kind, "label": label}
        )
        self.label = label


class MissingReferenceError(ParseError):
    """A relative position or duplicated state was built without its output."""

    def __init__(self, kind: str, label: str):
        super().__init__(
            code=ErrorCode.UNKNOWN_LABEL,
            message=f"{kind.capitalize()} '{label}' requires a reference output",
            context={"kind": kind, "label": label}
        )
        self.label = label


class ConfigurationError(SlamError):
    """Persisted layout file is malformed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Invalid layout config structure in {file_path}: {reason}",
            suggestion="Fix the file by hand or move it away to start with an empty catalog",
            context={"file_path": file_path, "reason": reason}
        )


class PersistenceError(SlamError):
    """Layout file could not be read or written."""

    def __init__(self, file_path: str, operation: str, reason: str):
        """
        Initialize persistence error.

        Args:
            file_path: Path to the layout config file
            operation: "read" or "write"
            reason: Reason for failure
        """
        code = ErrorCode.CONFIG_READ_FAILED if operation == "read" else ErrorCode.CONFIG_WRITE_FAILED
        super().__init__(
            code=code,
            message=f"Failed to {operation} config file {file_path}: {reason}",
            suggestion="Check file permissions and free disk space",
            context={"file_path": file_path, "operation": operation, "reason": reason}
        )


class CommandError(SlamError):
    """Base class for failures of external programs."""


class ExecutableNotFoundError(CommandError):
    def __init__(self, name: str):
        super().__init__(
            code=ErrorCode.EXECUTABLE_NOT_FOUND,
            message=f"Cannot find {name} in PATH!",
            suggestion=f"Please, install {name} or add it to PATH if installed",
            context={"name": name}
        )


class CommandSpawnError(CommandError):
    def __init__(self, command: str, reason: str):
        super().__init__(
            code=ErrorCode.COMMAND_SPAWN_FAILED,
            message=f"Failed to run the command `{command}`: {reason}",
            context={"command": command, "reason": reason}
        )


class CommandFailedError(CommandError):
    def __init__(self, command: str, returncode: int, stderr: str = ""):
        message = f"Command `{command}` exited with status {returncode}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(
            code=ErrorCode.COMMAND_FAILED,
            message=message,
            context={"command": command, "returncode": returncode}
        )
        self.returncode = returncode


class OutputDecodeError(CommandError):
    def __init__(self, command: str, reason: str):
        super().__init__(
            code=ErrorCode.OUTPUT_NOT_UTF8,
            message=f"Unable to decode UTF-8 output of `{command}`: {reason}",
            context={"command": command}
        )


class EmptyOutputError(CommandError):
    def __init__(self, command: str):
        super().__init__(
            code=ErrorCode.EMPTY_OUTPUT,
            message="Expected output, found empty value.",
            context={"command": command}
        )


class InvalidPickerOutputError(SlamError):
    """Picker answer did not match any offered option."""

    def __init__(self, answer: str):
        super().__init__(
            code=ErrorCode.PICKER_INVALID_OUTPUT,
            message=f"Output didn't match given options: {answer}",
            context={"answer": answer}
        )
        self.answer = answer


class EmptyPickerOutputError(SlamError):
    """Picker returned nothing: the user dismissed the menu.

    This is the cancellation signal of the whole program. It propagates up to
    the command line, which exits with status 0.
    """

    def __init__(self, prompt: str = ""):
        super().__init__(
            code=ErrorCode.PICKER_EMPTY_OUTPUT,
            message="Menu dismissed without a choice",
            context={"prompt": prompt}
        )
