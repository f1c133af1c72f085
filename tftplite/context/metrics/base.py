import logging

logger = logging.getLogger('tftplite.context.metrics.base')

class Metrics:
    """A class representing metrics of the transfer."""

    def __init__(self) -> None:
        # Bytes transferred
        self.bytes = 0
        # Duplicate packets received
        self.dupcount = 0
        # Times
        self.start_time = 0
        self.end_time = 0
        self.duration = 0
        # Rates
        self.bps = 0
        self.kbps = 0

    def compute(self) -> None:
        """Compute transfer time

           Sets:
               duration: Time taken for the transfer
               bps: Speed in bits per seconds
               kbps: Speed in kbps
        """

        self.duration = self.end_time - self.start_time

        if self.duration <= 0:
            logger.debug("TftpMetrics.compute: duration too short, rate undetermined")
            self.bps = self.kbps = 0
            return

        logger.debug(f"TftpMetrics.compute: duration is {self.duration}")
        self.bps = (self.bytes * 8.0) / self.duration
        self.kbps = self.bps / 1024.0
        logger.debug(f"TftpMetrics.compute: kbps is {self.kbps}")

    def add_dup(self) -> None:
        """Record a duplicate packet from the peer."""

        self.dupcount += 1

    def log(self, name: str) -> None:
        """Log the figures of a finished transfer."""

        if self.duration <= 0:
            logger.info(f"{name}: duration too short, rate undetermined")
        else:
            logger.info(f"{name}: transferred {self.bytes} bytes in {self.duration:.2f} seconds")
            logger.info(f"{name}: average rate {self.kbps:.2f} kbps")

        logger.info(f"{name}: {self.dupcount} duplicate packets")
