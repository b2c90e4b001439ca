"""Exception types raised by the Rack-O engine."""


class RackoError(Exception):
    """Base class for all Rack-O errors."""


class ConfigurationError(RackoError):
    """Configuration value is invalid or was set more than once."""


class EmptyPileError(RackoError):
    """Attempted to draw from an empty pile."""


class IndexOutOfRangeError(RackoError, IndexError):
    """Tray index outside [0, slot_count)."""

    def __init__(self, index: int, slot_count: int):
        super().__init__(f"Tray index {index} out of range (0-{slot_count - 1})")
        self.index = index
        self.slot_count = slot_count


class IllegalMoveError(RackoError):
    """Action not allowed in the current turn phase or hand state."""
