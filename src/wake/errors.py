"""Exceptions raised by the wake components."""


class WakeError(Exception):
    """Base class for every failure that terminates a wake run.

    Each error carries the one-line diagnostic shown to the user, the exit
    status the process ends with and the stream the diagnostic goes to.
    """

    exit_code = 1
    stream = "stderr"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsageError(WakeError):
    """Malformed command line (duplicate flag, bad count, extra argument...)."""

    stream = "stdout"


class ResolutionError(WakeError):
    """Host name lookup failed."""


class MacFormatError(WakeError, ValueError):
    """MAC address string does not hold exactly 12 hexadecimal digits."""


class TransportError(WakeError):
    """Socket creation or packet send failed."""
