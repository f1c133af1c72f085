import logging
import struct

from .base import TftpPacket
from tftplite.shared import tftpassert,ACK_CLAMP
from tftplite.exceptions import TftpPacketError

logger = logging.getLogger('tftplite.packet.types.acknowledge')

class Ack(TftpPacket):
    """
    Acknowledgement Packet
           2 bytes  2 bytes
           -----------------
    ACK   | 04    | Block # |
           -----------------
    """

    def __init__(self) -> None:
        super().__init__()
        self.opcode = 4
        self.blocknumber = 0

    def __str__(self) -> str:
        return f"ACK packet: block {self.blocknumber}"

    def encode(self) -> 'Ack':
        """Encode acknowledgement packet for sending. Block numbers outside
        [0, ACK_CLAMP] are sent as block 0.

        Returns:
            Ack: self
        """

        blocknumber = self.blocknumber
        if blocknumber < 0 or blocknumber > ACK_CLAMP:
            logger.warning(f"ACK block {blocknumber} out of range, sending 0")
            blocknumber = 0

        logger.debug(f"encoding ACK: opcode = {self.opcode}, block = {blocknumber}")
        self.buffer = struct.pack("!HH", self.opcode, blocknumber & 0xFFFF)
        return self

    def decode(self) -> 'Ack':
        """Decode an acknowledgement packet

        Raises:
            TftpPacketError: the datagram is shorter than 4 bytes

        Returns:
            Ack: self
        """

        tftpassert(len(self.buffer) >= 4, "malformed ACK packet, too short", TftpPacketError)

        if len(self.buffer) > 4:
            logger.debug("detected TFTP ACK but request is too large, will truncate")
            logger.debug(f"buffer was: {repr(self.buffer)}")
            self.buffer = self.buffer[0:4]

        self.opcode, self.blocknumber = struct.unpack("!HH", self.buffer)
        logger.debug(f"decoded ACK packet: opcode = {self.opcode}, block = {self.blocknumber}")
        return self
