"""Version value parsed from the libinput version probe."""

import re
from dataclasses import dataclass, field
from typing import Union

from packaging.version import InvalidVersion, Version

_VERSION_PATTERN = re.compile(r'\d+(?:\.\d+)*')


@dataclass(frozen=True, order=True)
class ToolVersion:
    """
    Installed libinput version.

    Ordering is component-wise numeric, so "1.10" sorts above "1.8"
    and "1.8" equals "1.8.0".
    """

    version: Version
    text: str = field(compare=False)

    @classmethod
    def parse(cls, output: str) -> 'ToolVersion':
        """
        Parse probe output such as "1.6.3\\n".

        Args:
            output: Raw standard output of the version command

        Returns:
            Parsed ToolVersion

        Raises:
            ValueError: If the output holds no dotted numeric version
        """
        text = output.strip()
        match = _VERSION_PATTERN.search(text)
        if not match:
            raise ValueError(f"no version in {text!r}")
        try:
            return cls(Version(match.group(0)), text)
        except InvalidVersion as e:
            raise ValueError(str(e)) from e

    @classmethod
    def coerce(cls, value: Union['ToolVersion', str, float]) -> 'ToolVersion':
        """Accept a ToolVersion, a version string or a float like 1.8."""
        if isinstance(value, ToolVersion):
            return value
        return cls.parse(str(value))

    def __str__(self) -> str:
        return str(self.version)
