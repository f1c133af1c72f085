import struct
import logging

from tftplite.shared import tftpassert,MAX_FILENAME
from tftplite.exceptions import TftpPacketError

logger = logging.getLogger('tftplite.packet.types.base')

class TftpPacket:
    """This class is the parent class of all tftp packet classes. It is an
    abstract class, providing an interface, and should not be instantiated
    directly."""

    def __init__(self) -> None:
        self.opcode = 0
        self.buffer = None

    def encode(self) -> None:
        """The encode method of a TftpPacket packs an appropriate buffer in
        network-byte order suitable for sending over the wire, from the
        instance variables of the packet.

        This is an abstract method."""
        raise NotImplementedError

    def decode(self) -> None:
        """The decode method of a TftpPacket takes a buffer off of the wire in
        network-byte order, and decodes it, populating internal properties as
        appropriate. This can only be done once the first 2-byte opcode has
        already been decoded, but the data section does include the entire
        datagram.

        This is an abstract method."""
        raise NotImplementedError


class TftpPacketInitial(TftpPacket):
    """This class is a common parent class for the RRQ and WRQ packets, as
    they share quite a bit of code."""

    def __init__(self) -> None:
        super().__init__()
        self.filename = None
        self.mode = None

    def encode(self) -> 'TftpPacketInitial':
        """Encode the packet's buffer from the instance variables.

        Returns:
            TftpPacketInitial: self
        """

        tftpassert(self.filename, "filename required in initial packet")
        tftpassert(self.mode, "mode required in initial packet")

        filename = self.filename
        mode = self.mode

        if not isinstance(filename, bytes):
            filename = filename.encode('latin-1')
        if not isinstance(mode, bytes):
            mode = mode.encode('ascii')

        logger.debug(f"Encoding request {self.opcode}, filename = {filename}, mode = {mode}")

        fmt = b"!H%dsx%dsx" % (len(filename), len(mode))
        self.buffer = struct.pack(fmt, self.opcode, filename, mode)
        return self

    def decode(self) -> 'TftpPacketInitial':
        """Decode the buffer. The filename is kept as latin-1 text so that
        every byte of it survives, and truncated to fit MAX_FILENAME with its
        terminator. The mode is lower-cased on a copy of the buffer.

        Raises:
            TftpPacketError: filename or mode is not NUL terminated

        Returns:
            TftpPacketInitial: self
        """
        tftpassert(self.buffer, "Can't decode, buffer is empty", TftpPacketError)

        subbuf = bytes(self.buffer[2:])
        fields = subbuf.split(b"\x00")
        logger.debug(f"decoding request, {len(fields) - 1} nulls in {repr(subbuf)}")

        # 'file\x00mode\x00'.split(b'\x00') == [b'file', b'mode', b'']
        tftpassert(len(fields) >= 3, "malformed request packet", TftpPacketError)

        filename = fields[0]
        if len(filename) > MAX_FILENAME - 1:
            logger.warning(f"filename of {len(filename)} bytes truncated to {MAX_FILENAME - 1}")
            filename = filename[:MAX_FILENAME - 1]

        self.filename = filename.decode('latin-1')
        self.mode = fields[1].lower().decode('latin-1')
        logger.debug(f"set filename to {self.filename}")
        logger.debug(f"set mode to {self.mode}")
        return self
