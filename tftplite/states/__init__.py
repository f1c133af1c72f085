"""This module implements the protocol state handling of the server.

The server is always in one of the lifecycle states of the State enum. Each
datagram received while listening or transferring is routed by the
Dispatcher through a table keyed by (state, opcode); the handler it finds
answers the peer and may start or end the transfer session."""

from .lifecycle import State
from .duplicates import DuplicatePolicy
from .dispatch import Dispatcher
