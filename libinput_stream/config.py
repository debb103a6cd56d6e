"""
Configuration for the libinput wrapper.

Reads libinput options and command overrides from a YAML file such as:

    libinput_options: [--enable-tap]
    debug_events_command: libinput debug-events
    wait_time: 0.3
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import LibinputConfigError
from .event_stream import DEFAULT_WAIT_TIME, EventStreamReader
from .resolver import CommandResolver

logger = logging.getLogger(__name__)


def get_default_config_path() -> Path:
    """Get the default config file path under the user's config directory."""
    return Path.home() / ".config" / "libinput-stream" / "config.yml"


@dataclass(frozen=True)
class LibinputConfig:
    """Options and overrides used to build a resolver and reader."""

    libinput_options: Tuple[str, ...] = ()
    list_devices_command: Optional[str] = None
    debug_events_command: Optional[str] = None
    wait_time: float = DEFAULT_WAIT_TIME

    # Expected type per key, for validating loaded values
    _FIELD_TYPES = {
        'libinput_options': list,
        'list_devices_command': str,
        'debug_events_command': str,
        'wait_time': (int, float),
    }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LibinputConfig':
        """
        Build a config from parsed YAML, skipping unknown or invalid keys.

        Args:
            data: Mapping of setting names to values
        """
        values: Dict[str, Any] = {}
        for key, value in data.items():
            expected = cls._FIELD_TYPES.get(key)
            if expected is None:
                logger.warning(f"Ignoring unknown setting '{key}'")
                continue
            if value is None:
                continue
            if not isinstance(value, expected) or isinstance(value, bool):
                logger.warning(f"Ignoring setting '{key}': unexpected value {value!r}")
                continue
            if key == 'libinput_options':
                value = tuple(str(option) for option in value)
            elif key == 'wait_time':
                if value <= 0:
                    logger.warning(f"Ignoring setting 'wait_time': must be positive, got {value}")
                    continue
                value = float(value)
            values[key] = value

        config = cls(**values)
        logger.debug(f"Current settings: {config}")
        return config

    @classmethod
    def load(cls, config_file: Optional[Path] = None, strict: bool = False) -> 'LibinputConfig':
        """
        Load config from a YAML file.

        A missing file yields defaults. Unreadable or malformed files raise
        LibinputConfigError when strict, otherwise are logged and replaced
        by defaults.

        Args:
            config_file: Path to the YAML file (default: ~/.config/libinput-stream/config.yml)
            strict: Raise instead of falling back to defaults
        """
        path = config_file if config_file else get_default_config_path()
        try:
            if not path.exists():
                logger.info(f"No config file found at {path}, using defaults")
                return cls()

            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise LibinputConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
            logger.info(f"Loaded config from {path}")
            return cls.from_dict(data)

        except (OSError, yaml.YAMLError, LibinputConfigError) as e:
            if strict:
                if isinstance(e, LibinputConfigError):
                    raise
                raise LibinputConfigError(f"Failed to load {path}: {e}") from e
            logger.error(f"Failed to load config: {e}", exc_info=True)
            return cls()

    def with_options(self, *options: str) -> 'LibinputConfig':
        """Return a copy with extra libinput options appended."""
        return replace(self, libinput_options=self.libinput_options + tuple(options))

    def create_resolver(self, **kwargs) -> CommandResolver:
        """Build a CommandResolver; kwargs are passed through (e.g. logger)."""
        return CommandResolver(
            libinput_options=self.libinput_options,
            list_devices_command=self.list_devices_command,
            debug_events_command=self.debug_events_command,
            **kwargs
        )

    def create_reader(self, resolver: Optional[CommandResolver] = None, **kwargs) -> EventStreamReader:
        """Build an EventStreamReader over the given or a fresh resolver."""
        return EventStreamReader(resolver or self.create_resolver(), wait_time=self.wait_time, **kwargs)
