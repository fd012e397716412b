"""Command line interface: wake [-v] [-c count] [-h host] <mac>"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_COUNT, Configuration
from .errors import UsageError, WakeError
from .packet import MagicPacket
from .resolver import resolve_host
from .transmitter import transmit


logger = logging.getLogger(__name__)

USAGE = """Usage: wake [-v] [-c count] [-h host] <mac>

    -v          Verbose output.

    -c count    Send ``count'' packets with a one second interval (default: 1)

    -h host     Target hostname or IP address (default: IPv4 broadcast).

    mac         Ethernet (MAC) address in 12 hexadecimal digits; other
                characters (such as grouping characters) are ignored.
"""


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    log_level = logging.INFO if verbose else logging.WARNING

    formatter = logging.Formatter('%(name)s: %(levelname)s: %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stdout is reserved for usage and progress text
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


class _SingleUseAction(argparse.Action):
    """Base for options that may appear at most once."""

    def _check_duplicate(self, namespace, option_string):
        if getattr(namespace, self.dest) is not None:
            raise UsageError(f"Duplicate option: {option_string}")


class _VerboseAction(_SingleUseAction):
    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        self._check_duplicate(namespace, option_string)
        setattr(namespace, self.dest, True)


class _CountAction(_SingleUseAction):
    def __call__(self, parser, namespace, values, option_string=None):
        self._check_duplicate(namespace, option_string)
        try:
            count = int(values)
        except ValueError:
            count = 0
        if count <= 0:
            raise UsageError(f"Invalid argument to {option_string}: {values}")
        setattr(namespace, self.dest, count)


class _HostAction(_SingleUseAction):
    """Resolves the host as soon as the option is seen."""

    def __call__(self, parser, namespace, values, option_string=None):
        self._check_duplicate(namespace, option_string)
        setattr(namespace, self.dest, resolve_host(values))


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="wake", add_help=False, usage=argparse.SUPPRESS, allow_abbrev=False)
    parser.add_argument('-v', dest='verbose', action=_VerboseAction, default=None)
    parser.add_argument('-c', dest='count', action=_CountAction, default=None, metavar='count')
    parser.add_argument('-h', dest='destination', action=_HostAction, default=None, metavar='host')
    parser.add_argument('mac', nargs='*')
    return parser


def parse_args(argv: List[str]) -> Optional[Configuration]:
    """
    Turn command line arguments into a Configuration.

    Args:
        argv: Arguments without the program name

    Returns:
        The configuration, or None when no MAC address was given

    Raises:
        UsageError: malformed command line
        ResolutionError: the -h host could not be resolved
        MacFormatError: the MAC address is invalid
    """
    args, extras = build_parser().parse_known_args(argv)

    for extra in extras:
        if extra.startswith('--'):
            raise UsageError(f"Unrecognized option: {extra}")
        if extra.startswith('-') and extra != '-':
            # Clustered short options: name only the first unknown letter
            raise UsageError(f"Unrecognized option: {extra[:2]}")

    positionals = list(args.mac) + extras
    if len(positionals) > 1:
        raise UsageError("Too many arguments.")
    if not positionals:
        return None

    packet = MagicPacket.from_string(positionals[0])
    return Configuration(
        packet=packet,
        verbose=bool(args.verbose),
        count=args.count or DEFAULT_COUNT,
        destination=args.destination,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; maps every failure to a message and an exit status."""
    if argv is None:
        argv = sys.argv[1:]

    setup_logging()

    try:
        config = parse_args(argv)
        if config is None:
            sys.stdout.write(USAGE + "\n")
            return 0

        setup_logging(config.verbose)
        transmit(config)

    except WakeError as e:
        if e.stream == "stdout":
            print(f"{e.message}\n", file=sys.stdout)
        else:
            print(e.message, file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
