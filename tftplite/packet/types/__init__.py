"""Packet classes, one per TFTP opcode. Each class packs itself into
``buffer`` with encode() and unpacks ``buffer`` with decode(), both returning
the packet so calls can be chained."""

from .base import TftpPacket,TftpPacketInitial
from .request import ReadRQ,WriteRQ
from .data import Data
from .acknowledge import Ack
from .error import Error
