"""This module holds the state of the single transfer the server is handling.

A Session is created by a successful read or write request and dropped when
the server returns to listening. It carries the peer it belongs to, the block
and duplicate counters, the open file and the metrics of the transfer."""

from .session import Session,READ,WRITE
from .metrics import Metrics
