#!/usr/bin/env python3
"""Tests for packet transmission."""

import io
import os
import socket
import sys
import unittest
from unittest import mock

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from wake.config import Configuration
from wake.errors import TransportError
from wake.packet import MagicPacket
from wake.resolver import Destination
from wake.transmitter import Transmitter, transmit


class TransmitterTestCase(unittest.TestCase):
    """Patches the socket factory and sleep for every test."""

    def setUp(self):
        self.packet = MagicPacket.from_string('00:1B:44:11:3A:B7')
        self.destination = Destination(host='192.168.1.100', address='192.168.1.100')

        self.sock = mock.Mock()
        self.sock.sendto.return_value = 102

        socket_patcher = mock.patch('wake.transmitter.socket.socket', return_value=self.sock)
        self.socket_factory = socket_patcher.start()
        self.addCleanup(socket_patcher.stop)

        sleep_patcher = mock.patch('wake.transmitter.time.sleep')
        self.sleep = sleep_patcher.start()
        self.addCleanup(sleep_patcher.stop)


class TestTransmitter(TransmitterTestCase):

    def test_open_enables_broadcast(self):
        with Transmitter():
            pass

        self.socket_factory.assert_called_once_with(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.setsockopt.assert_called_once_with(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        self.sock.close.assert_called_once_with()

    def test_broadcast_refusal_is_a_warning(self):
        self.sock.setsockopt.side_effect = PermissionError(13, 'Permission denied')

        with self.assertLogs('wake.transmitter', level='WARNING') as logs:
            with Transmitter() as transmitter:
                transmitter.send(self.packet, self.destination)

        self.assertIn('setsockopt(SO_BROADCAST) failed', logs.output[0])
        self.sock.sendto.assert_called_once()

    def test_socket_creation_failure(self):
        self.socket_factory.side_effect = OSError(24, 'Too many open files')

        with self.assertRaises(TransportError) as ctx:
            Transmitter().open()
        self.assertTrue(str(ctx.exception).startswith('socket() failed'))

    def test_send_full_payload(self):
        with Transmitter() as transmitter:
            transmitter.send(self.packet, self.destination)

        self.sock.sendto.assert_called_once_with(self.packet.payload, ('192.168.1.100', 9))

    def test_short_send_is_fatal(self):
        self.sock.sendto.return_value = 50

        with Transmitter() as transmitter:
            with self.assertRaises(TransportError) as ctx:
                transmitter.send(self.packet, self.destination)
        self.assertIn('sent 50 of 102 bytes', str(ctx.exception))

    def test_send_error_is_fatal(self):
        self.sock.sendto.side_effect = OSError(101, 'Network is unreachable')

        with Transmitter() as transmitter:
            with self.assertRaises(TransportError) as ctx:
                transmitter.send(self.packet, self.destination)
        self.assertIn('sendto() failed', str(ctx.exception))
        self.assertIn('Network is unreachable', str(ctx.exception))

    def test_send_on_closed_socket(self):
        with self.assertRaises(TransportError):
            Transmitter().send(self.packet, self.destination)

    def test_repeat_count_and_pauses(self):
        """count sends with a pause between each pair and none after the last."""
        with Transmitter() as transmitter:
            transmitter.send_repeated(self.packet, self.destination, 3)

        self.assertEqual(self.sock.sendto.call_count, 3)
        self.assertEqual(self.sleep.call_count, 2)
        self.sleep.assert_called_with(1.0)

    def test_single_send_no_pause(self):
        with Transmitter() as transmitter:
            transmitter.send_repeated(self.packet, self.destination, 1)

        self.assertEqual(self.sock.sendto.call_count, 1)
        self.sleep.assert_not_called()

    def test_verbose_progress(self):
        out = io.StringIO()
        with Transmitter() as transmitter:
            transmitter.send_repeated(self.packet, self.destination, 2, verbose=True, out=out)

        self.assertEqual(out.getvalue(),
                         "Sending packet 1 of 2... done.\n"
                         "Sending packet 2 of 2... done.\n")

    def test_quiet_by_default(self):
        out = io.StringIO()
        with Transmitter() as transmitter:
            transmitter.send_repeated(self.packet, self.destination, 2, out=out)

        self.assertEqual(out.getvalue(), "")

    def test_failure_stops_repeating(self):
        self.sock.sendto.side_effect = [102, OSError(101, 'Network is unreachable')]

        with Transmitter() as transmitter:
            with self.assertRaises(TransportError):
                transmitter.send_repeated(self.packet, self.destination, 5)

        self.assertEqual(self.sock.sendto.call_count, 2)
        self.sock.close.assert_called_once_with()


class TestTransmit(TransmitterTestCase):

    def test_default_destination_is_broadcast(self):
        config = Configuration(packet=self.packet)

        transmit(config)

        self.sock.sendto.assert_called_once_with(self.packet.payload, ('255.255.255.255', 9))

    def test_broadcast_resolved_after_socket_creation(self):
        calls = []
        self.socket_factory.side_effect = lambda *args: calls.append('socket') or self.sock

        def fake_resolve():
            calls.append('resolve')
            return Destination(host='255.255.255.255', address='255.255.255.255')

        with mock.patch('wake.transmitter.resolve_broadcast', side_effect=fake_resolve):
            transmit(Configuration(packet=self.packet))

        self.assertEqual(calls, ['socket', 'resolve'])

    def test_explicit_destination(self):
        config = Configuration(packet=self.packet, count=2, destination=self.destination)

        with mock.patch('wake.transmitter.resolve_broadcast') as resolve_broadcast:
            transmit(config)

        resolve_broadcast.assert_not_called()
        self.sock.sendto.assert_called_with(self.packet.payload, ('192.168.1.100', 9))
        self.assertEqual(self.sock.sendto.call_count, 2)
        self.assertEqual(self.sleep.call_count, 1)


if __name__ == '__main__':
    unittest.main()
