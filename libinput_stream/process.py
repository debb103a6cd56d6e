"""
Child process handling for libinput commands.

Spawns a command with a readable line stream and provides a bounded
single-line wait backed by a reader thread and a queue.
"""

import logging
import queue
import shlex
import subprocess
import threading
from typing import Callable, List, Optional

from .errors import LibinputSpawnError

logger = logging.getLogger(__name__)

# Seconds to wait for a terminated child before killing it
TERMINATE_TIMEOUT = 1.0

SpawnFunc = Callable[[str], subprocess.Popen]
RunFunc = Callable[[str], str]

# Marks the end of output in the line queue
_EOF = object()


def open_line_stream(args: List[str]) -> subprocess.Popen:
    """
    Start a program with its standard output as a text line stream.

    Bytes that are not valid UTF-8 are replaced rather than ending the stream.

    Args:
        args: Program and arguments

    Returns:
        Running process with stdout piped
    """
    return subprocess.Popen(
        args,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        errors='replace',
        bufsize=1
    )


def spawn_process(command: str) -> subprocess.Popen:
    """
    Start a command with its standard output as a text line stream.

    Args:
        command: Shell-style command string

    Returns:
        Running process with stdout piped

    Raises:
        LibinputSpawnError: If the program cannot be started
    """
    try:
        return open_line_stream(shlex.split(command))
    except OSError as e:
        raise LibinputSpawnError(command, e) from e


def run_command(command: str) -> str:
    """
    Run a short-lived command and return its standard output.

    Args:
        command: Shell-style command string

    Returns:
        Captured stdout (untrimmed)

    Raises:
        LibinputSpawnError: If the program cannot be started
    """
    try:
        result = subprocess.run(
            shlex.split(command),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors='replace'
        )
    except OSError as e:
        raise LibinputSpawnError(command, e) from e
    return result.stdout


def terminate_process(process: subprocess.Popen) -> None:
    """Stop a child process and release its output pipe."""
    if process.poll() is None:
        process.terminate()
        try:
            process.wait(timeout=TERMINATE_TIMEOUT)
        except subprocess.TimeoutExpired:
            logger.warning(f"Process {process.pid} ignored SIGTERM, killing")
            process.kill()
            process.wait()
    if process.stdout is not None:
        process.stdout.close()


class LineReader:
    """
    Reads lines from a stream on a background thread.

    Each call to readline() waits independently; a line that arrives after
    one wait expired is delivered by the next call, never lost.
    """

    def __init__(self, stream):
        """
        Initialize and start the reader thread.

        Args:
            stream: Text stream to read lines from
        """
        self._queue: queue.Queue = queue.Queue()
        self._closed = False
        self._error: Optional[Exception] = None
        self._thread = threading.Thread(target=self._pump, args=(stream,), daemon=True)
        self._thread.start()

    def _pump(self, stream) -> None:
        try:
            for line in stream:
                self._queue.put(line.rstrip('\r\n'))
        except (OSError, ValueError) as e:
            if not stream.closed:
                self._error = e
            else:
                # Closed during teardown
                logger.debug(f"Line reader stopped: {e}")
        finally:
            self._queue.put(_EOF)

    @property
    def closed(self) -> bool:
        """True once the end of the stream has been read."""
        return self._closed

    def readline(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Wait for the next line.

        Args:
            timeout: Maximum time to wait in seconds (None waits forever)

        Returns:
            The line without its trailing newline, or None if the wait expired

        Raises:
            EOFError: If the stream has ended
            OSError, ValueError: If reading the stream failed
        """
        if self._closed:
            raise EOFError("end of stream")
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _EOF:
            self._closed = True
            if self._error is not None:
                raise self._error
            raise EOFError("end of stream")
        return item
