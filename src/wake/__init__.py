"""wake - Wake-on-LAN magic packet sender

A small command line tool that powers on a remote machine by sending
Wake-on-LAN magic packets over UDP to its host or the local broadcast address.
"""

__version__ = "1.0.0"
