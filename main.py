#!/usr/bin/env python3
"""wake - Main Entry Point

Sends Wake-on-LAN magic packets to power on a machine on the local network.

Usage: python main.py [-v] [-c count] [-h host] <mac>
"""

import os
import sys

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from wake.cli import main


if __name__ == '__main__':
    sys.exit(main())
