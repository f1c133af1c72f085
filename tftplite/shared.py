# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-

"""This module holds all objects shared by all other modules in tftplite."""

from tftplite.exceptions import TftpException

DEF_BLKSIZE = 512
MAX_DGRAM_SIZE = DEF_BLKSIZE + 4
MAX_FILENAME = 260
ERROR_BUFFER = 128
MAX_DUPS = 10
DEF_TFTP_PORT = 69
POLL_INTERVAL = 0.01

# ACK block numbers outside [0, ACK_CLAMP] are sent as 0. Valid block numbers
# never get there, the bound is kept for compatibility.
ACK_CLAMP = 603135

def tftpassert(condition, msg, exc=TftpException):
    """This function is a simple utility that will check the condition
    passed for a false state. If it finds one, it throws a TftpException
    (or the exception class passed) with the message passed. This just
    makes the code throughout cleaner by refactoring."""
    if not condition:
        raise exc(msg)

# The only error code this server sends; the reason goes in the message.
ERR_NOTDEFINED = 0
