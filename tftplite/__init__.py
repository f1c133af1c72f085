# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-
"""
This library implements a minimal TFTP server (RFC 1350). It handles one
transfer at a time, in octet mode, with the fixed 512 byte block size.

The TftpServer class is the entry point: create one, then call its
process_step() method periodically or start a TftpPoller on it.
"""

from .server import TftpServer
from .poller import TftpPoller
from .states import State
from .transport import UdpTransport
from .storage import FileStorage
from .exceptions import TftpException,TftpPacketError,TftpBindError,TftpFileNotFoundError
