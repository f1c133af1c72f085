# vim: ts=4 sw=4 et ai:
# -*- coding: utf8 -*-
"""Drives a TftpServer from a thread, calling process_step() once per
polling interval."""

import time
import logging
import threading

from tftplite.shared import POLL_INTERVAL
from tftplite.exceptions import TftpException

logger = logging.getLogger('tftplite.poller')

class TftpPoller(threading.Thread):
    """Thread polling a server until stop() is called.

    process_step() calls never overlap since this thread is their only
    caller."""

    def __init__(self, server: 'TftpServer', interval: float = None) -> None:
        super().__init__(name='TftpPoller', daemon=True)
        self.server = server
        self.interval = POLL_INTERVAL if interval is None else interval

        # Set while the polling loop runs.
        self.is_running = threading.Event()
        self._stop_event = threading.Event()

    def run(self) -> None:
        logger.debug(f"Polling {self.server} every {self.interval} seconds")
        self.is_running.set()

        try:
            while not self._stop_event.is_set():
                next_time = time.monotonic() + self.interval

                try:
                    self.server.process_step()
                except (TftpException, OSError) as err:
                    logger.error(f"Polling {self.server} failed: {err}")

                self._stop_event.wait(max(0, next_time - time.monotonic()))
        finally:
            self.is_running.clear()
            logger.debug("poller returning from while loop")

    def stop(self, timeout: float = None) -> None:
        """Stop polling and wait for the thread to finish. The server is
        left as it is."""

        self._stop_event.set()
        if self.is_alive():
            self.join(timeout)
