"""
Unit tests for the line reader and process helpers
"""

import io
import os
import sys
import time
import unittest

from libinput_stream.errors import LibinputSpawnError
from libinput_stream.process import LineReader, run_command, spawn_process, terminate_process
from helpers import PythonSpawner


class TestLineReader(unittest.TestCase):
    """Test LineReader functionality."""

    def test_strips_newlines(self):
        """Test line endings are removed and content kept intact."""
        reader = LineReader(io.StringIO("first\nsecond\r\n  padded  \n"))

        self.assertEqual(reader.readline(timeout=1.0), "first")
        self.assertEqual(reader.readline(timeout=1.0), "second")
        self.assertEqual(reader.readline(timeout=1.0), "  padded  ")

    def test_eof(self):
        """Test end of stream raises EOFError, repeatedly."""
        reader = LineReader(io.StringIO("only\n"))

        self.assertEqual(reader.readline(timeout=1.0), "only")
        with self.assertRaises(EOFError):
            reader.readline(timeout=1.0)
        self.assertTrue(reader.closed)
        with self.assertRaises(EOFError):
            reader.readline(timeout=1.0)

    def test_timeout(self):
        """Test an idle stream returns None after the wait."""
        read_fd, write_fd = os.pipe()
        stream = os.fdopen(read_fd, 'r')
        try:
            reader = LineReader(stream)
            start = time.monotonic()
            self.assertIsNone(reader.readline(timeout=0.1))
            self.assertGreaterEqual(time.monotonic() - start, 0.09)

            os.write(write_fd, b"late line\n")
            self.assertEqual(reader.readline(timeout=1.0), "late line")
        finally:
            os.close(write_fd)
            stream.close()


class TestProcessLifetime(unittest.TestCase):
    """Test process start and teardown."""

    def test_terminates_running_child(self):
        """Test a running child is stopped and its pipe closed."""
        process = PythonSpawner("""
            import time
            time.sleep(30)
        """)('ignored')
        self.assertIsNone(process.poll())

        terminate_process(process)

        self.assertIsNotNone(process.poll())
        self.assertTrue(process.stdout.closed)

    def test_terminate_finished_child(self):
        """Test teardown of a child that already exited."""
        process = PythonSpawner('print("done")')('ignored')
        process.wait()

        terminate_process(process)

        self.assertEqual(process.returncode, 0)
        self.assertTrue(process.stdout.closed)

    def test_missing_program(self):
        """Test a missing program raises LibinputSpawnError."""
        with self.assertRaises(LibinputSpawnError) as ctx:
            spawn_process('/nonexistent/libinput debug-events')

        self.assertEqual(ctx.exception.command, '/nonexistent/libinput debug-events')
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)

    def test_invalid_utf8_is_replaced(self):
        """Test undecodable bytes are replaced instead of ending the stream."""
        process = PythonSpawner("""
            import sys
            sys.stdout.buffer.write(b"Device: Caf\\xe9 Pad\\n")
            sys.stdout.buffer.write(b"Kernel: /dev/input/event5\\n")
        """)('ignored')
        try:
            lines = [line.rstrip('\n') for line in process.stdout]
        finally:
            terminate_process(process)

        self.assertEqual(lines, ["Device: Caf� Pad", "Kernel: /dev/input/event5"])


class TestLineReaderErrors(unittest.TestCase):
    """Test read failures are reported instead of looking like end of stream."""

    def test_read_error_is_raised(self):
        """Test a decode error on an open stream reaches the caller."""
        stream = io.TextIOWrapper(io.BytesIO(b"ok\n\xe9\n"), encoding='utf-8')
        reader = LineReader(stream)

        with self.assertRaises(UnicodeDecodeError):
            while True:
                reader.readline(timeout=1.0)


class TestRunCommand(unittest.TestCase):
    """Test short-lived command execution."""

    def test_returns_stdout(self):
        """Test stdout is captured untrimmed."""
        output = run_command(f'"{sys.executable}" -c "print(\'1.6.3\')"')
        self.assertEqual(output, "1.6.3\n")

    def test_missing_program(self):
        """Test a missing program raises LibinputSpawnError."""
        with self.assertRaises(LibinputSpawnError):
            run_command('/nonexistent/libinput --version')


if __name__ == '__main__':
    unittest.main()
