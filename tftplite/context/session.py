import logging
import time

from typing import BinaryIO, Tuple

from .metrics import Metrics

logger = logging.getLogger('tftplite.context.session')

READ = 'read'
WRITE = 'write'

Address = Tuple[str, int]

class Session:
    """The one transfer in progress: who it is with, which way the file goes,
    how far it got."""

    def __init__(self, peer: Address, direction: str, filename: str,
                 fileobj: BinaryIO) -> None:
        """Start tracking a transfer

        Args:
            peer (Address): (ip, port) the request came from
            direction (str): READ when the server sends the file, WRITE when it receives it
            filename (str): requested filename
            fileobj (BinaryIO): file opened for the transfer
        """

        self.peer = peer
        self.direction = direction
        self.filename = filename
        self.fileobj = fileobj
        self.block = 0
        self.dups = 0
        # Payload length of the last DAT sent, read transfers only.
        self.last_size = 0
        self.metrics = Metrics()
        self.metrics.start_time = time.time()

    def __str__(self) -> str:
        return f"{self.direction} {self.filename} with {self.peer[0]}:{self.peer[1]} block {self.block}"

    @property
    def block(self) -> int:
        """Gets the current block number"""
        return self.__block

    @block.setter
    def block(self, block: int) -> None:
        """Sets the block number or rolls over if greater than 2^16 blocks"""

        if block >= 2 ** 16:
            logger.debug("Block number rollover to 0 again")
            block = 0
        self.__block = block

    @property
    def next_block(self) -> int:
        return (self.block + 1) % 2 ** 16

    def is_peer(self, address: Address) -> bool:
        return tuple(address) == tuple(self.peer)

    def end(self, storage: 'FileStorage') -> None:
        """Close the file through the storage backend and compute the
        metrics. Safe to call twice."""

        if self.fileobj is not None:
            logger.debug(f"closing file of session {self}")
            storage.close(self.fileobj)
            self.fileobj = None

        if not self.metrics.end_time:
            self.metrics.end_time = time.time()
            self.metrics.compute()
