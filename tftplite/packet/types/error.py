import logging
import struct

from .base import TftpPacket
from tftplite.shared import tftpassert,ERR_NOTDEFINED,ERROR_BUFFER
from tftplite.exceptions import TftpPacketError

logger = logging.getLogger('tftplite.packet.types.error')

# opcode, error code and the message terminator
HEADER_SIZE = 5

class Error(TftpPacket):
    """
        Error Packet

            2 bytes   2 bytes      string   1 byte
            --------------------------------------
     ERROR | 05     | ErrorCode |  ErrMsg  |   0  |
            --------------------------------------

    The server always sends error code 0 (not defined) and puts the reason
    in the message. The encoded packet never exceeds ERROR_BUFFER bytes.
    """

    def __init__(self, errmsg: str = "", errorcode: int = ERR_NOTDEFINED) -> None:
        super().__init__()
        self.opcode = 5
        self.errorcode = errorcode
        self.errmsg = errmsg

    def __str__(self) -> str:
        return f"ERR packet: errorcode = {self.errorcode}\n    msg = {self.errmsg}"

    def encode(self) -> 'Error':
        """Encode the Error packet, truncating the message to fit.

        Returns:
            Error: self
        """

        msg = self.errmsg
        if not isinstance(msg, bytes):
            msg = msg.encode('latin-1', 'replace')
        msg = msg.split(b"\x00", 1)[0][:ERROR_BUFFER - HEADER_SIZE]

        fmt = b"!HH%dsx" % len(msg)
        logger.debug(f"encoding ERR packet with fmt {fmt}")
        self.buffer = struct.pack(fmt,
                                  self.opcode,
                                  self.errorcode,
                                  msg)

        return self

    def decode(self) -> 'Error':
        """Decode Error packet

        Raises:
            TftpPacketError: the datagram is shorter than 4 bytes

        Returns:
            Error: self
        """

        buflen = len(self.buffer)
        tftpassert(buflen >= 4, "malformed ERR packet, too short", TftpPacketError)
        logger.debug(f"Decoding ERR packet, length {buflen} bytes")

        self.opcode, self.errorcode = struct.unpack("!HH", self.buffer[:4])

        if buflen == 4:
            logger.debug("Allowing this affront to the RFC of a 4-byte packet")
            self.errmsg = ""
        else:
            self.errmsg = bytes(self.buffer[4:]).split(b"\x00", 1)[0].decode('latin-1')

        logger.info(f"ERR packet - errorcode: {self.errorcode}, message: {self.errmsg}")

        return self
