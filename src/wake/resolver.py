"""Host name resolution for the Wake-on-LAN destination."""

import logging
import socket
from dataclasses import dataclass
from typing import Tuple

from .errors import ResolutionError


logger = logging.getLogger(__name__)

DISCARD_PORT = 9
BROADCAST_ADDRESS = "255.255.255.255"


@dataclass(frozen=True)
class Destination:
    """A resolved IPv4 UDP endpoint."""

    host: str
    address: str
    port: int = DISCARD_PORT
    family: int = socket.AF_INET

    @property
    def sockaddr(self) -> Tuple[str, int]:
        return (self.address, self.port)

    def __str__(self) -> str:
        return f"{self.address}:{self.port}"


def resolve_host(host: str) -> Destination:
    """
    Resolve a host name or IPv4 literal to a discard-port destination.

    Args:
        host: Host name, dotted quad or the broadcast literal

    Returns:
        Destination built from the first IPv4 address found

    Raises:
        ResolutionError: the lookup failed or returned nothing
    """
    try:
        results = socket.getaddrinfo(host, DISCARD_PORT, socket.AF_INET, socket.SOCK_DGRAM)
    except (OSError, UnicodeError) as e:
        logger.debug(f"getaddrinfo({host!r}) failed: {e}")
        raise ResolutionError(f'Could not determine address of host "{host}"!') from e

    if not results:
        raise ResolutionError(f'Could not determine address of host "{host}"!')

    family, _type, _proto, _canonname, sockaddr = results[0]
    destination = Destination(host=host, address=sockaddr[0], port=sockaddr[1], family=family)
    logger.debug(f"Resolved {host} to {destination}")
    return destination


def resolve_broadcast() -> Destination:
    """Resolve the IPv4 limited broadcast address used when no host is given."""
    return resolve_host(BROADCAST_ADDRESS)
