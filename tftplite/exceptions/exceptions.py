class TftpException(Exception):
    """This class is the parent class of all exceptions regarding the handling
    of the TFTP protocol."""
    pass

class TftpPacketError(TftpException):
    """A datagram could not be decoded: unknown opcode, truncated header or
    missing string terminator."""
    pass

class TftpBindError(TftpException):
    """The listening socket could not be bound. The server stays unusable
    until it is reset."""
    pass


class TftpFileNotFoundError(TftpException):
    """This class represents an error condition where a requested file
    could not be opened for reading."""
    pass
