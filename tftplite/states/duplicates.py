import logging

from tftplite.shared import MAX_DUPS
from tftplite.context import Session

logger = logging.getLogger('tftplite.states.duplicates')

class DuplicatePolicy:
    """Counts consecutive repeated packets of a session and decides when to
    give up on it. There are no timers: the server only resends in answer
    to a repeated packet from the client."""

    def __init__(self, max_dups: int = MAX_DUPS) -> None:
        self.max_dups = max_dups

    def register(self, session: Session) -> bool:
        """Record one more duplicate.

        Returns:
            bool: True when the session has seen too many and must be abandoned
        """

        session.dups += 1
        session.metrics.add_dup()
        logger.warning(f"Duplicate {session.dups} on session {session}")

        if session.dups > self.max_dups:
            logger.error(f"Too many duplicates on session {session}, giving up")
            return True

        return False

    def clear(self, session: Session) -> None:
        """Forward progress was made."""
        session.dups = 0
