"""
AnonBoard Error Types

Every failure surfaced by the board core maps to one of these classes.
The ``outcome`` attribute is the stable value handed to the transport.
"""


class BoardError(Exception):
    """Base exception for message board errors."""

    outcome = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.outcome)
        self.message = message or self.outcome


class NotFoundError(BoardError):
    """Referenced board, thread or reply does not exist."""

    outcome = "not found"


class IncorrectCredentialError(BoardError):
    """Supplied delete password does not match the stored digest."""

    outcome = "incorrect password"


class ValidationError(BoardError):
    """Missing or malformed input, rejected before any store write."""

    outcome = "missing required field(s)"


class StoreUnavailableError(BoardError):
    """The underlying database could not be reached."""

    outcome = "store unavailable"
