class CharFsmError(Exception):
    """Base class for errors raised by charfsm."""


class PatternSyntaxError(CharFsmError, ValueError):
    """Raised when a character-class pattern cannot be compiled."""

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        super().__init__(f"{reason} at position {position} in {pattern!r}")
        self.pattern = pattern
        self.position = position
        self.reason = reason


class InvalidSymbolError(CharFsmError, ValueError):
    """Raised when a text machine is fed something other than one character."""
