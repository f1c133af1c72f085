import logging

from typing import Optional, Tuple

from tftplite.shared import DEF_BLKSIZE
from tftplite.exceptions import TftpException,TftpPacketError
from tftplite.packet import types
from tftplite.packet.factory import PacketFactory,packet_type
from tftplite.context import Session,READ,WRITE
from .lifecycle import State
from .duplicates import DuplicatePolicy

logger = logging.getLogger('tftplite.states.dispatch')

Address = Tuple[str, int]

RRQ, WRQ, DAT, ACK, ERR = 1, 2, 3, 4, 5

class Dispatcher:
    """Decides what to do with each datagram given the state of the server.

    The context is the TftpServer. The dispatcher reads its state and session,
    sends replies through its transport, touches files through its storage
    and asks it to start or end the session."""

    def __init__(self, context: 'TftpServer') -> None:
        self.context = context
        self.factory = PacketFactory()
        self.dups = DuplicatePolicy()

        self._handlers = {
            (State.LISTENING, RRQ): self.listening_rrq,
            (State.LISTENING, WRQ): self.listening_wrq,
            (State.LISTENING, DAT): self.listening_dat,
            (State.LISTENING, ACK): self.listening_ack,
            (State.LISTENING, ERR): self.listening_err,
            (State.READING, RRQ): self.reading_rrq,
            (State.READING, WRQ): self.reading_wrq,
            (State.READING, DAT): self.reading_dat,
            (State.READING, ACK): self.reading_ack,
            (State.WRITING, WRQ): self.writing_wrq,
            (State.WRITING, DAT): self.writing_dat,
            }

        # Used for any other opcode and for datagrams that can't be decoded.
        self._fallbacks = {
            State.LISTENING: self.listening_unknown,
            State.READING: self.reading_unknown,
            State.WRITING: self.writing_unknown,
            }

    def dispatch(self, buffer: bytes, address: Address) -> None:
        """Handle one datagram received from address."""

        state = self.context.state
        session = self.context.session

        if session is not None and not session.is_peer(address):
            logger.debug(f"Ignoring traffic from {address[0]}:{address[1]} during session {session}")
            return

        try:
            pkt = self.factory.parse(buffer)
        except TftpPacketError as err:
            logger.warning(f"Undecodable datagram from {address[0]}:{address[1]}: {err}")
            pkt = None

        opcode = pkt.opcode if pkt is not None else None
        handler = self._handlers.get((state, opcode), self._fallbacks.get(state))

        if handler is None:
            logger.debug(f"Not handling datagrams while {state.value}")
            return

        handler(pkt, address)

    # Sending

    def send(self, address: Address, pkt: packet_type) -> None:
        """Encode and send a packet. A failing send is logged; the peer will
        repeat itself or give up."""

        try:
            self.context.transport.send_to(address, pkt.encode().buffer)
        except OSError as err:
            logger.error(f"Sending {pkt} to {address[0]}:{address[1]} failed: {err}")

    def send_ack(self, address: Address, blocknumber: int) -> None:
        logger.debug(f"Sending ack to block {blocknumber}")
        ackpkt = types.Ack()
        ackpkt.blocknumber = blocknumber
        self.send(address, ackpkt)

    def send_error(self, address: Address, errmsg: str) -> None:
        logger.info(f"Sending error to {address[0]}:{address[1]}: {errmsg.strip()}")
        errpkt = types.Error(errmsg)
        self.send(address, errpkt)

    def send_dat(self, session: Session, address: Address) -> None:
        """Read the next block of the file and send it. A read failure
        aborts the session."""

        session.block += 1

        try:
            buffer = self.context.storage.read_chunk(session.fileobj, DEF_BLKSIZE)
        except OSError as err:
            logger.error(f"Reading {session.filename} failed: {err}")
            self.send_error(address, f"Could not read file: {session.filename}\r\n")
            self.context.end_session()
            return

        if len(buffer) < DEF_BLKSIZE:
            logger.info(f"Reached EOF on file {session.filename}")

        dat = types.Data()
        dat.blocknumber = session.block
        dat.data = buffer
        session.last_size = len(buffer)
        session.metrics.bytes += len(buffer)

        logger.debug(f"Sending DAT packet {dat.blocknumber}")
        self.send(address, dat)

    # Listening

    def listening_rrq(self, pkt: types.ReadRQ, address: Address) -> None:
        self.context.filename = pkt.filename
        logger.info(f"Read request for {pkt.filename} from {address[0]}:{address[1]}")

        if pkt.mode != 'octet':
            logger.info(f"Mode {pkt.mode} requested, transferring as octet")

        try:
            fileobj = self.context.storage.open_read(pkt.filename)
        except TftpException as err:
            logger.warning(str(err))
            self.send_error(address, f"Could not read file: {pkt.filename}\r\n")
            return

        session = Session(address, READ, pkt.filename, fileobj)
        self.context.start_session(session, State.READING)
        self.send_dat(session, address)

    def listening_wrq(self, pkt: types.WriteRQ, address: Address) -> None:
        # The request is acknowledged before the file is opened.
        self.send_ack(address, 0)
        self.context.filename = pkt.filename
        logger.info(f"Write request for {pkt.filename} from {address[0]}:{address[1]}")

        if pkt.mode != 'octet':
            logger.info(f"Mode {pkt.mode} requested, transferring as octet")

        try:
            fileobj = self.context.storage.open_write(pkt.filename)
        except (OSError, TftpException) as err:
            logger.error(f"Could not open {pkt.filename} to write: {err}")
            self.send_error(address, "Could not open file to write.\n")
            return

        session = Session(address, WRITE, pkt.filename, fileobj)
        self.context.start_session(session, State.WRITING)

    def listening_dat(self, pkt: types.Data, address: Address) -> None:
        self.send_error(address, "No data expected.\r\n")

    def listening_ack(self, pkt: types.Ack, address: Address) -> None:
        self.send_error(address, "No ack expected.\r\n")

    def listening_err(self, pkt: types.Error, address: Address) -> None:
        logger.debug(f"Discarding {pkt} received while listening")

    def listening_unknown(self, pkt: Optional[packet_type], address: Address) -> None:
        self.send_error(address, "Unknown TFTP packet type.\r\n")

    # Reading: we send DAT, the peer sends ACK

    def reading_rrq(self, pkt: types.ReadRQ, address: Address) -> None:
        session = self.context.session

        if session.block != 1:
            logger.warning(f"Ignoring repeated RRQ at block {session.block}")
            return

        # The peer never saw the first block, it asks again.
        self.send_ack(address, 0)
        if self.dups.register(session):
            self.send_error(address, "Too many dups")
            self.context.end_session()

    def reading_wrq(self, pkt: types.WriteRQ, address: Address) -> None:
        self.send_error(address, "WRQ received on open read socket")
        self.context.end_session()

    def reading_dat(self, pkt: types.Data, address: Address) -> None:
        # Umm, we send DAT, you don't.
        self.send_error(address, "Received data package on sending socket")
        self.context.end_session()

    def reading_ack(self, pkt: types.Ack, address: Address) -> None:
        session = self.context.session
        self.dups.clear(session)

        if pkt.blocknumber != session.block:
            logger.debug(f"ACK for block {pkt.blocknumber} while at block {session.block}")

        if session.last_size == DEF_BLKSIZE:
            self.send_dat(session, address)
        else:
            logger.info(f"Sent {session.filename} to {address[0]}:{address[1]}")
            self.context.end_session(completed=True)

    def reading_unknown(self, pkt: Optional[packet_type], address: Address) -> None:
        if pkt is not None:
            logger.warning(f"Received {pkt} during a read transfer")
        self.send_error(address, "Received 0x05 error message")
        self.context.end_session()

    # Writing: the peer sends DAT, we send ACK

    def writing_wrq(self, pkt: types.WriteRQ, address: Address) -> None:
        logger.debug("Resending ACK on WRQ")
        self.send_ack(address, 0)

    def writing_dat(self, pkt: types.Data, address: Address) -> None:
        """Take a DAT packet of an upload. Every path that keeps the session
        alive acknowledges the packet, so a short payload then completes the
        transfer without a further ACK."""

        session = self.context.session
        expected = session.next_block
        logger.debug(f"Handling DAT packet - block {pkt.blocknumber}, expecting {expected}")

        if pkt.blocknumber == expected:
            self.send_ack(address, pkt.blocknumber)

            try:
                self.context.storage.append(session.fileobj, pkt.data)
            except OSError as err:
                logger.error(f"Writing {session.filename} failed: {err}")
                self.send_error(address, "Could not write file.\r\n")
                self.context.end_session(delete=True)
                return

            session.block = pkt.blocknumber
            session.metrics.bytes += len(pkt.data)
            self.dups.clear(session)

        elif pkt.blocknumber > expected:
            logger.error(f"Received future block {pkt.blocknumber} but expected {expected}")
            self.send_error(address, "Packet count mismatch")
            self.context.end_session(delete=True)
            return

        else:
            if self.dups.register(session):
                self.send_error(address, "Too many dups")
                self.context.end_session(delete=True)
                return

            logger.debug(f"ACKing block {session.block} again, just in case")
            self.send_ack(address, session.block)

        if pkt.final:
            logger.info(f"Received {session.filename} from {address[0]}:{address[1]}")
            self.context.end_session(completed=True)

    def writing_unknown(self, pkt: Optional[packet_type], address: Address) -> None:
        self.send_error(address, "No idea why you're sending me this!")
