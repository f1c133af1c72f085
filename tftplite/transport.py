# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-
"""The UDP socket the server listens on. Receives never block, so one
polling cycle of the server always returns promptly."""

import socket
import logging

from typing import Optional, Tuple

from tftplite.shared import MAX_DGRAM_SIZE
from tftplite.exceptions import TftpBindError

logger = logging.getLogger('tftplite.transport')

Address = Tuple[str, int]

class UdpTransport:
    """A non-blocking datagram socket bound to one local address."""

    def __init__(self, listenip: str = None) -> None:
        self.listenip = listenip or '127.0.0.1'
        self.port = None
        self.sock = None

    def bind(self, port: int) -> None:
        """Open the socket and bind it. Port 0 picks a free port, the
        port actually bound is kept in self.port.

        Args:
            port (int): local port

        Raises:
            TftpBindError: the socket could not be bound
        """

        logger.info(f"Binding to ip {self.listenip}, port {port}")
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self.sock.bind((self.listenip, port))
        except OSError as err:
            self.sock.close()
            self.sock = None
            raise TftpBindError(f"Could not bind {self.listenip}:{port}: {err}") from err

        self.sock.setblocking(False)
        _, self.port = self.sock.getsockname()

    def send_to(self, address: Address, data: bytes) -> None:
        logger.debug(f"Sending {len(data)} bytes to {address[0]}:{address[1]}")
        self.sock.sendto(data, address)

    def receive_from(self) -> Optional[Tuple[bytes, Address]]:
        """Read one datagram if one is waiting.

        Returns:
            (bytes, Address) or None: the datagram and its sender
        """

        try:
            buffer, address = self.sock.recvfrom(MAX_DGRAM_SIZE)
        except (BlockingIOError, InterruptedError):
            return None
        except ConnectionResetError:
            # Windows reports an ICMP port unreachable from an earlier
            # sendto here.
            logger.debug("Connection reset reported on receive, ignoring")
            return None

        logger.debug(f"Read {len(buffer)} bytes from {address[0]}:{address[1]}")
        return buffer, address

    def close(self) -> None:
        if self.sock is not None:
            logger.debug("closing socket")
            self.sock.close()
            self.sock = None
