"""Run configuration and timing constants."""

from dataclasses import dataclass
from typing import Optional

from .packet import MagicPacket
from .resolver import Destination

DEFAULT_COUNT = 1
SEND_INTERVAL = 1.0


@dataclass(frozen=True)
class Configuration:
    """Validated settings for a single run, built once by the argument parser."""

    packet: MagicPacket
    verbose: bool = False
    count: int = DEFAULT_COUNT
    destination: Optional[Destination] = None
