#!/usr/bin/env python3
"""
libinput-stream - Main Entry Point

Prints libinput list-devices or debug-events output line by line,
choosing the libinput CLI form that matches the installed version.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from libinput_stream import TIMEOUT_MESSAGE, LibinputConfig, LibinputError


def setup_logging(level: str) -> None:
    """
    Configure logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='libinput-stream - Stream libinput device events',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list-devices                     # List input devices
  %(prog)s debug-events                     # Stream device events
  %(prog)s debug-events --enable-tap        # Pass extra libinput options
  %(prog)s debug-events --show-timeouts     # Also print idle markers
  %(prog)s version                          # Print installed libinput version
        """
    )

    parser.add_argument(
        'action',
        choices=['list-devices', 'debug-events', 'version'],
        help='What to run'
    )

    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='YAML config file (default: ~/.config/libinput-stream/config.yml)'
    )

    parser.add_argument(
        '--wait-time',
        type=float,
        default=None,
        help='Seconds to wait for each debug-events line'
    )

    parser.add_argument(
        '--show-timeouts',
        action='store_true',
        help=f'Print "{TIMEOUT_MESSAGE}" when no event arrives in time'
    )

    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING)'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    # Unrecognised arguments are passed through to libinput debug-events
    parser = build_parser()
    args, libinput_options = parser.parse_known_args(argv)
    if libinput_options and args.action != 'debug-events':
        parser.error(f"unrecognized arguments: {' '.join(libinput_options)}")

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        config = LibinputConfig.load(args.config, strict=args.config is not None)
        config = config.with_options(*libinput_options)
        if args.wait_time is not None:
            if args.wait_time <= 0:
                logger.error("--wait-time must be positive")
                return 2
            config = replace(config, wait_time=args.wait_time)

        reader = config.create_reader()

        def emit(line: str) -> None:
            if line == TIMEOUT_MESSAGE and not args.show_timeouts:
                return
            print(line, flush=True)

        if args.action == 'version':
            print(reader.resolver.get_version())
        elif args.action == 'list-devices':
            reader.stream_list_devices(emit)
        else:
            reader.stream_debug_events(emit)

    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    except LibinputError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
