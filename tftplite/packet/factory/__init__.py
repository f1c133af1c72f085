"""This module implements the PacketFactory class, which can take a binary
buffer, and return the appropriate TftpPacket object to represent it, via the
parse() method."""

from .factory import PacketFactory,packet_type
