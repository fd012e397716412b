"""UDP transmission of Wake-on-LAN magic packets."""

import logging
import socket
import sys
import time
from typing import Optional, TextIO

from .config import SEND_INTERVAL, Configuration
from .errors import TransportError
from .packet import PACKET_SIZE, MagicPacket
from .resolver import Destination, resolve_broadcast


logger = logging.getLogger(__name__)


class Transmitter:
    """Owns the datagram socket used to send magic packets."""

    def __init__(self, interval: float = SEND_INTERVAL):
        self.interval = interval
        self._sock: Optional[socket.socket] = None

    def __enter__(self) -> "Transmitter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        """Create the UDP socket and try to allow broadcast on it."""
        try:
            self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            raise TransportError(f"socket() failed: {e}") from e

        # Enable broadcasting, may not always be possible
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        except OSError as e:
            logger.warning(f"setsockopt(SO_BROADCAST) failed: {e}")

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def send(self, packet: MagicPacket, destination: Destination) -> None:
        """Send one packet; anything short of the full payload is an error."""
        if self._sock is None:
            raise TransportError("sendto() failed: socket is not open")

        payload = packet.payload
        try:
            sent = self._sock.sendto(payload, destination.sockaddr)
        except OSError as e:
            raise TransportError(f"sendto() failed: {e}") from e

        if sent != PACKET_SIZE:
            raise TransportError(f"sendto() failed: sent {sent} of {PACKET_SIZE} bytes")
        logger.debug(f"Sent {sent} bytes for {packet.mac_hex} to {destination}")

    def send_repeated(self, packet: MagicPacket, destination: Destination, count: int,
                      verbose: bool = False, out: Optional[TextIO] = None) -> None:
        """
        Send ``packet`` ``count`` times, pausing between consecutive sends.

        Args:
            packet: Magic packet to send
            destination: Resolved target
            count: Number of sends, at least 1
            verbose: Write a progress line per send to ``out``
            out: Progress stream, stdout when omitted
        """
        out = out or sys.stdout
        for n in range(1, count + 1):
            if verbose:
                out.write(f"Sending packet {n} of {count}... ")
                out.flush()

            self.send(packet, destination)

            if verbose:
                out.write("done.\n")
                out.flush()

            if n < count:
                time.sleep(self.interval)

        logger.debug(f"Sent {count} magic packet(s) for {packet.mac_hex} to {destination}")


def transmit(config: Configuration, out: Optional[TextIO] = None) -> None:
    """Open a socket and deliver the configured packet."""
    with Transmitter() as transmitter:
        destination = config.destination
        if destination is None:
            destination = resolve_broadcast()
        transmitter.send_repeated(config.packet, destination, config.count,
                                  verbose=config.verbose, out=out)
