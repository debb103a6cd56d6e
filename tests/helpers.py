"""
Shared helpers for libinput-stream tests.
"""

import sys
import textwrap

from libinput_stream.process import open_line_stream


class PythonSpawner:
    """Spawn function that runs a Python script instead of the given command."""

    def __init__(self, script: str):
        self.script = textwrap.dedent(script)
        self.commands = []
        self.processes = []

    def __call__(self, command: str):
        self.commands.append(command)
        process = open_line_stream([sys.executable, '-u', '-c', self.script])
        self.processes.append(process)
        return process


class FakeRun:
    """Records version probe commands and returns canned output."""

    def __init__(self, output: str = "1.21.0\n"):
        self.output = output
        self.commands = []

    def __call__(self, command: str) -> str:
        self.commands.append(command)
        return self.output


def fake_which(*available):
    """Build a PATH lookup that only finds the given binaries."""
    def which(binary):
        return f"/usr/bin/{binary}" if binary in available else None
    return which
