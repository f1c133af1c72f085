from enum import Enum

class State(Enum):
    """Lifecycle states of the server."""

    LISTENING = 'listening'
    READING = 'reading'
    WRITING = 'writing'
    ERROR = 'error'
    SUSPENDED = 'suspended'
    DELETED = 'deleted'

    @property
    def polling(self) -> bool:
        """Whether datagrams are read at all in this state."""
        return self in (State.LISTENING, State.READING, State.WRITING)
