# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-
"""This module implements the TFTP Server functionality. Instantiate an
instance of the server and call process_step() periodically, or hand it to a
TftpPoller which does that from a thread. The server handles a single
transfer at a time; traffic from any other client is ignored until the
transfer ends. Logging is performed via standard logging objects named after
the tftplite modules."""

import logging

from tftplite.shared import DEF_TFTP_PORT
from tftplite.exceptions import TftpBindError
from tftplite.context import Session,WRITE
from tftplite.states import State,Dispatcher
from tftplite.storage import FileStorage
from tftplite.transport import UdpTransport

logger = logging.getLogger('tftplite.server')

class TftpServer:
    """This class implements a tftp server object. The socket is bound on
    construction; if that fails the server is left in the ERROR state until
    reset() succeeds.

    transport: An object with bind(port), send_to(address, data),
        receive_from() and close() methods, and a port attribute. Defaults
        to a UdpTransport on listenip.

    storage: An object with open_read, open_write, read_chunk, append,
        close and delete methods. Defaults to a FileStorage on tftproot.
    """

    def __init__(self, tftproot: str = None, listenip: str = None, listenport: int = None,
                 transport: UdpTransport = None, storage: FileStorage = None) -> None:
        """Initialize the server and bind its socket

        Args:
            tftproot (str, optional): Server root. Defaults to ./tftpboot
            listenip (str, optional): Listening address. Defaults to 127.0.0.1.
            listenport (int, optional): Listening port, 0 picks a free one. Defaults to 69.
            transport (UdpTransport, optional): datagram transport to use instead of a UDP socket
            storage (FileStorage, optional): file backend to use instead of tftproot

        Raises:
            TftpException: tftp root is not readable
            FileNotFoundError: the tftp root specified doesn't exist
        """

        self.listenip = listenip or '127.0.0.1'
        self.listenport = DEF_TFTP_PORT if listenport is None else listenport
        self.storage = storage or FileStorage(tftproot or './tftpboot')
        self.transport = transport or UdpTransport(self.listenip)
        self.dispatcher = Dispatcher(self)

        # The transfer in progress, only set while READING or WRITING.
        self.session = None
        # Current or most recent requested filename.
        self.filename = ''
        self._file_count = 0
        self._state = State.LISTENING

        self.bind()

    def __str__(self) -> str:
        return f"TftpServer {self.listenip}:{self.listenport} {self._state.value}"

    @property
    def state(self) -> State:
        return self._state

    @property
    def file_count(self) -> int:
        """Number of files received since start or the last reset."""
        return self._file_count

    def bind(self) -> None:
        """Bind the transport to the listening port. The port actually bound
        is kept so that a reset binds the same one again."""

        try:
            self.transport.bind(self.listenport)
        except TftpBindError as err:
            logger.error(str(err))
            self._state = State.ERROR
            return

        self.listenport = self.transport.port
        logger.info(f"Server listening on ip {self.listenip}, port {self.listenport}")
        self._state = State.LISTENING

    def reset(self) -> None:
        """Drop any transfer, rebind the socket and clear the filename and
        received file count."""

        logger.info(f"Resetting {self}")
        if self.session is not None:
            self.end_session(delete=True)

        self.transport.close()
        self.filename = ''
        self._file_count = 0
        self.bind()

    def suspend(self) -> None:
        """Stop handling datagrams. A transfer in progress is abandoned."""

        if self.session is not None:
            logger.warning(f"Suspending during session {self.session}, abandoning it")
            self.end_session(delete=True)

        logger.info("Server suspended")
        self._state = State.SUSPENDED

    def resume(self) -> None:
        if self._state == State.SUSPENDED:
            logger.info("Server resumed")
            self._state = State.LISTENING

    def close(self) -> None:
        """Release the socket and any open file for good."""

        if self.session is not None:
            self.end_session(delete=True)

        self.transport.close()
        self._state = State.DELETED
        logger.info("Server closed")

    def process_step(self) -> None:
        """Handle at most one waiting datagram. Never blocks; does nothing
        unless the server is listening or transferring."""

        if not self._state.polling:
            return

        received = self.transport.receive_from()
        if received is None:
            return

        buffer, address = received
        self.dispatcher.dispatch(buffer, address)

    def start_session(self, session: Session, state: State) -> None:
        logger.info(f"Starting session {session}")
        self.session = session
        self._state = state

    def end_session(self, completed: bool = False, delete: bool = False) -> None:
        """End the transfer in progress, closing its file, and go back to
        listening.

        Args:
            completed (bool, optional): the transfer finished normally
            delete (bool, optional): remove the file of an unfinished upload
        """

        session = self.session
        session.end(self.storage)

        if completed:
            logger.info(f"Session {session} complete")
            if session.direction == WRITE:
                self._file_count += 1
        else:
            logger.warning(f"Session {session} abandoned")
            if delete and session.direction == WRITE:
                try:
                    self.storage.delete(session.filename)
                except OSError as err:
                    logger.error(f"Could not remove {session.filename}: {err}")

        session.metrics.log(session.filename)
        self.session = None
        self._state = State.LISTENING
