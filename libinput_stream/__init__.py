"""
libinput-stream - A resilient wrapper around the libinput command-line tool.

Resolves the libinput CLI form for the installed version and streams
list-devices and debug-events output line by line.
"""

__version__ = "1.0.0"

from .config import LibinputConfig
from .errors import (
    LibinputConfigError,
    LibinputError,
    LibinputNotFoundError,
    LibinputSpawnError,
    LibinputVersionError,
    StreamClosedError,
)
from .event_stream import DEFAULT_WAIT_TIME, TIMEOUT_MESSAGE, EventStreamReader
from .resolver import NEW_CLI_OPTION_VERSION, CommandResolver
from .version import ToolVersion

__all__ = [
    'CommandResolver',
    'EventStreamReader',
    'LibinputConfig',
    'ToolVersion',
    'LibinputError',
    'LibinputNotFoundError',
    'LibinputSpawnError',
    'LibinputVersionError',
    'LibinputConfigError',
    'StreamClosedError',
    'DEFAULT_WAIT_TIME',
    'TIMEOUT_MESSAGE',
    'NEW_CLI_OPTION_VERSION',
]
