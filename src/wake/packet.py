"""Wake-on-LAN magic packet construction and MAC address parsing."""

import logging
import string
from dataclasses import dataclass

from .errors import MacFormatError


logger = logging.getLogger(__name__)

MAC_LENGTH = 6
SYNC_BYTE = 0xFF
REPETITIONS = 16
PACKET_SIZE = MAC_LENGTH + REPETITIONS * MAC_LENGTH

_HEX_DIGITS = frozenset(string.hexdigits)


def parse_mac(text: str) -> bytes:
    """
    Parse a MAC address written as 12 hexadecimal digits.

    Every character that is not a hex digit is skipped wherever it appears,
    so any grouping style works ("00:11:22:33:44:55", "0011.2233.4455",
    "00-11-22-33-44-55"). Characters after the 12th digit are ignored as long
    as none of them is another hex digit.

    Args:
        text: MAC address string as typed by the user

    Returns:
        The 6 address bytes

    Raises:
        MacFormatError: fewer or more than 12 hex digits were found
    """
    digits = []
    for char in text:
        if char not in _HEX_DIGITS:
            continue
        if len(digits) == 2 * MAC_LENGTH:
            raise MacFormatError(f'Invalid MAC address: "{text}"!')
        digits.append(char)

    if len(digits) != 2 * MAC_LENGTH:
        raise MacFormatError(f'Invalid MAC address: "{text}"!')

    return bytes.fromhex("".join(digits))


@dataclass(frozen=True)
class MagicPacket:
    """The 102-byte Wake-on-LAN payload for one target adapter."""

    mac: bytes

    def __post_init__(self):
        if len(self.mac) != MAC_LENGTH:
            raise MacFormatError(f"MAC address must be {MAC_LENGTH} bytes, got {len(self.mac)}")
        # Magic packet format:
        # - 6 bytes of 0xFF
        # - MAC address repeated 16 times
        payload = bytes([SYNC_BYTE]) * MAC_LENGTH + self.mac * REPETITIONS
        object.__setattr__(self, "_payload", payload)

    @classmethod
    def from_string(cls, text: str) -> "MagicPacket":
        """Parse ``text`` with :func:`parse_mac` and build its packet."""
        packet = cls(parse_mac(text))
        logger.debug(f"Built magic packet for MAC {packet.mac_hex}")
        return packet

    @property
    def payload(self) -> bytes:
        return self._payload

    @property
    def mac_hex(self) -> str:
        """MAC address as upper-case colon separated hex, e.g. 00:1B:44:11:3A:B7."""
        return self.mac.hex(":").upper()
