"""
libinput-specific error types.

All errors inherit from LibinputError for easy catching.
"""

from typing import Iterable


class LibinputError(Exception):
    """Base exception for all libinput wrapper failures."""
    pass


class LibinputNotFoundError(LibinputError):
    """Raised when no known libinput binary can be found on PATH."""

    def __init__(self, searched: Iterable[str]):
        self.searched = tuple(searched)
        super().__init__(
            f"None of {', '.join(self.searched)} found on PATH; install libinput-tools"
        )


class LibinputVersionError(LibinputError):
    """Raised when the version probe output does not contain a version."""

    def __init__(self, command: str, output: str):
        self.command = command
        self.output = output
        super().__init__(f"Could not parse libinput version from '{command}': {output!r}")


class StreamClosedError(LibinputError, EOFError):
    """Raised when the debug-events output closes while it is being streamed."""

    def __init__(self, command: str, returncode=None):
        self.command = command
        self.returncode = returncode
        super().__init__(f"Output of '{command}' closed (exit status: {returncode})")


class LibinputConfigError(LibinputError):
    """Raised when a configuration file cannot be read or parsed."""
    pass


class LibinputSpawnError(LibinputError):
    """Raised when a libinput command cannot be started."""

    def __init__(self, command: str, cause: OSError):
        self.command = command
        self.cause = cause
        super().__init__(f"Could not start '{command}': {cause.strerror or cause}")
