import struct
import logging

from .base import TftpPacket
from tftplite.shared import tftpassert,DEF_BLKSIZE
from tftplite.exceptions import TftpPacketError

logger = logging.getLogger('tftplite.packet.types.data')

class Data(TftpPacket):
    """
           2 bytes  2 bytes  n bytes
           ---------------------~~--
    DATA  | 03    | Block # | Data  |
           ---------------------~~--

    A payload shorter than DEF_BLKSIZE, including an empty one, marks the
    last block of a transfer.
    """

    def __init__(self) -> None:
        super().__init__()
        self.opcode = 3
        self.blocknumber = 0
        self.data = b""

    def __str__(self) -> str:
        s = f"DAT packet: block {self.blocknumber}"
        if self.data:
            s += f"\n    data: {len(self.data)} bytes"

        return s

    @property
    def final(self) -> bool:
        return len(self.data) < DEF_BLKSIZE

    def encode(self) -> 'Data':
        """Encode the Data packet.

        Returns:
            Data: self
        """

        if len(self.data) == 0:
            logger.debug("Encoding an empty DAT packet")

        fmt = b"!HH%ds" % len(self.data)
        self.buffer = struct.pack(fmt,
                                  self.opcode,
                                  self.blocknumber & 0xFFFF,
                                  self.data)

        return self

    def decode(self) -> 'Data':
        """Decode Data packet.

        Raises:
            TftpPacketError: the datagram is shorter than the DATA header

        Returns:
            Data: self
        """

        tftpassert(len(self.buffer) >= 4, "malformed DAT packet, too short", TftpPacketError)

        # We know the first 2 bytes are the opcode. The second two are the
        # block number.
        (self.blocknumber,) = struct.unpack("!H", self.buffer[2:4])
        logger.debug(f"decoding DAT packet, block number {self.blocknumber}")

        # Everything else is data.
        self.data = bytes(self.buffer[4:4 + DEF_BLKSIZE])
        logger.debug(f"found {len(self.data)} bytes of data")

        return self
