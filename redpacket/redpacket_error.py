class RedPacketError(Exception):
    pass


class InvalidConfiguration(RedPacketError, ValueError):
    """Raised when a fund / share count combination cannot give every share at least
    one minor unit, or is otherwise malformed. Only ever raised at creation time."""


class PacketNotFound(RedPacketError, KeyError):
    """Raised when an operation references a packet id with no stored record."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Packet not found"


class TransientStoreFailure(RedPacketError):
    """Raised when the backing store could not complete an atomic update (unreachable,
    or contention beyond the retry budget). The caller may retry, but should re-read
    the packet status before assuming anything about the outcome."""


class InvariantViolation(RedPacketError):
    """Raised when a packet's conservation invariants do not hold. This indicates a
    programming error - processing of the packet stops rather than repairing data."""
