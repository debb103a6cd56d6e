"""
Command resolution for the libinput CLI.

libinput 1.8 replaced the standalone `libinput-list-devices` and
`libinput-debug-events` binaries with `libinput list-devices` and
`libinput debug-events`. The resolver picks the form matching the installed
version unless the caller supplies explicit commands.
"""

import logging
import shutil
import threading
from typing import Callable, Iterable, Optional, Tuple

from .errors import LibinputNotFoundError, LibinputSpawnError, LibinputVersionError
from .process import RunFunc, run_command
from .version import ToolVersion

logger = logging.getLogger(__name__)

NEW_CLI_OPTION_VERSION = ToolVersion.coerce('1.8')

# Unbuffered stdout so events arrive line by line through the pipe
LINE_BUFFER_PREFIX = 'stdbuf -oL --'

# Probed in order of preference
VERSION_BINARIES = ('libinput', 'libinput-list-devices')


class CommandResolver:
    """
    Resolves list-devices, debug-events and version probe commands.

    The installed version is probed lazily, at most once per instance.
    """

    def __init__(
        self,
        libinput_options: Iterable[str] = (),
        list_devices_command: Optional[str] = None,
        debug_events_command: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        which: Optional[Callable[[str], Optional[str]]] = None,
        run: Optional[RunFunc] = None
    ):
        """
        Initialize the resolver.

        Args:
            libinput_options: Extra tokens appended to debug-events, in order
            list_devices_command: Override for the list-devices command
            debug_events_command: Override for the debug-events command
            logger: Logger receiving debug/error records (default: module logger)
            which: PATH lookup returning a path or None (default: shutil.which)
            run: Runs a command and returns its stdout (default: run_command)
        """
        self._libinput_options: Tuple[str, ...] = tuple(libinput_options)
        self._list_devices_command = list_devices_command
        self._debug_events_command = debug_events_command
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._which = which or shutil.which
        self._run = run or run_command
        self._version: Optional[ToolVersion] = None
        self._version_lock = threading.Lock()

    @property
    def libinput_options(self) -> Tuple[str, ...]:
        """Extra debug-events options in caller order."""
        return self._libinput_options

    def resolve_version_probe_command(self) -> str:
        """
        Get the command that prints the installed libinput version.

        Returns:
            Version command string

        Raises:
            LibinputNotFoundError: If no override pair is configured and
                neither known binary is on PATH
        """
        if self._debug_events_command and self._list_devices_command:
            return f"{self._list_devices_command} --version"

        for binary in VERSION_BINARIES:
            if self._which(binary):
                return f"{binary} --version"

        self._logger.error("install libinput-tools", extra={'searched': VERSION_BINARIES})
        raise LibinputNotFoundError(VERSION_BINARIES)

    def get_version(self) -> ToolVersion:
        """
        Get the installed libinput version, probing on first use.

        Raises:
            LibinputNotFoundError: If libinput cannot be located
            LibinputVersionError: If the probe prints no version
            LibinputSpawnError: If the probe command cannot be started
        """
        if self._version is not None:
            return self._version

        with self._version_lock:
            if self._version is None:
                command = self.resolve_version_probe_command()
                self._logger.debug(f"version_command: {command}", extra={'version_command': command})
                try:
                    output = self._run(command)
                except LibinputSpawnError as e:
                    self._logger.error(f"version probe failed: {e}", extra={'version_command': command})
                    raise
                try:
                    self._version = ToolVersion.parse(output)
                except ValueError as e:
                    raise LibinputVersionError(command, output) from e
                self._logger.debug(f"libinput version: {self._version}")
        return self._version

    def new_cli_option_available(self) -> bool:
        """Check whether the installed libinput has the subcommand CLI."""
        return self.get_version() >= NEW_CLI_OPTION_VERSION

    def resolve_list_devices_command(self) -> str:
        if self._list_devices_command:
            return self._list_devices_command
        if self.new_cli_option_available():
            return 'libinput list-devices'
        return 'libinput-list-devices'

    def resolve_debug_events_command(self) -> str:
        if self._debug_events_command:
            return self._debug_events_command
        if self.new_cli_option_available():
            return 'libinput debug-events'
        return 'libinput-debug-events'

    def resolve_debug_events_with_options(self) -> str:
        """Full debug-events spawn string with line buffering and options."""
        options = ' '.join(self._libinput_options)
        return f"{LINE_BUFFER_PREFIX} {self.resolve_debug_events_command()} {options}".strip()
