"""
Streaming of libinput command output.

list-devices is read to completion. debug-events is read forever, with each
line read bounded by a short wait; an expired wait yields TIMEOUT_MESSAGE so
consumers wake up periodically even while input devices are idle.
"""

import logging
import threading
from contextlib import closing
from typing import Callable, Iterator, Optional

from .errors import LibinputSpawnError, StreamClosedError
from .process import LineReader, SpawnFunc, spawn_process, terminate_process
from .resolver import CommandResolver

logger = logging.getLogger(__name__)

DEFAULT_WAIT_TIME = 0.3
TIMEOUT_MESSAGE = 'LIBINPUT TIMEOUT'

Consumer = Callable[[str], None]


class EventStreamReader:
    """Spawns resolved libinput commands and delivers their output lines."""

    def __init__(
        self,
        resolver: CommandResolver,
        wait_time: float = DEFAULT_WAIT_TIME,
        logger: Optional[logging.Logger] = None,
        spawn: Optional[SpawnFunc] = None
    ):
        """
        Initialize the reader.

        Args:
            resolver: Source of the commands to spawn
            wait_time: Seconds to wait for each debug-events line
            logger: Logger receiving debug records (default: module logger)
            spawn: Starts a command and returns a process with piped stdout
                (default: spawn_process)
        """
        if wait_time <= 0:
            raise ValueError(f"wait_time must be positive, got {wait_time}")
        self.resolver = resolver
        self.wait_time = wait_time
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._spawn = spawn or spawn_process

    def iter_list_devices(self, stop_event: Optional[threading.Event] = None) -> Iterator[str]:
        """
        Yield lines of list-devices output until the command exits.

        A command that cannot be started is logged and yields nothing.

        Args:
            stop_event: Optional cancellation token checked between lines
        """
        command = self.resolver.resolve_list_devices_command()
        self._logger.debug(f"list_devices: {command}", extra={'list_devices': command})

        try:
            process = self._spawn(command)
        except LibinputSpawnError as e:
            self._logger.error(f"list_devices failed: {e}", extra={'list_devices': command})
            return

        try:
            for line in process.stdout:
                if stop_event is not None and stop_event.is_set():
                    self._logger.debug("list_devices cancelled")
                    return
                yield line.rstrip('\r\n')
        finally:
            terminate_process(process)

    def iter_debug_events(self, stop_event: Optional[threading.Event] = None) -> Iterator[str]:
        """
        Yield debug-events lines, or TIMEOUT_MESSAGE when a line is late.

        Runs until the generator is closed or stop_event is set.

        Args:
            stop_event: Optional cancellation token checked before each read

        Raises:
            StreamClosedError: If the debug-events output closes
            LibinputSpawnError: If debug-events cannot be started
        """
        command = self.resolver.resolve_debug_events_with_options()
        self._logger.debug(f"debug_events: {command}", extra={'debug_events': command})

        try:
            process = self._spawn(command)
        except LibinputSpawnError as e:
            self._logger.error(f"debug_events failed: {e}", extra={'debug_events': command})
            raise

        try:
            reader = LineReader(process.stdout)
            while stop_event is None or not stop_event.is_set():
                try:
                    line = reader.readline(timeout=self.wait_time)
                except EOFError as e:
                    raise StreamClosedError(command, process.poll()) from e
                yield TIMEOUT_MESSAGE if line is None else line
            self._logger.debug("debug_events cancelled")
        finally:
            terminate_process(process)

    def stream_list_devices(self, consumer: Consumer, stop_event: Optional[threading.Event] = None) -> None:
        """Call consumer with each list-devices line, in order."""
        with closing(self.iter_list_devices(stop_event)) as lines:
            for line in lines:
                consumer(line)

    def stream_debug_events(self, consumer: Consumer, stop_event: Optional[threading.Event] = None) -> None:
        """
        Call consumer with each debug-events line or TIMEOUT_MESSAGE.

        The consumer runs in-line; the next read starts after it returns.
        Without a stop_event this only returns by exception.
        """
        with closing(self.iter_debug_events(stop_event)) as lines:
            for line in lines:
                consumer(line)
