from .exceptions import TftpException,TftpPacketError,TftpBindError,TftpFileNotFoundError
