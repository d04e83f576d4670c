"""Exceptions raised by the message and voting services."""


class BoardError(RuntimeError):
    """Base exception for failures raised by the board services.

    Every failure is terminal for the request that triggered it.
    """


class ValidationError(BoardError):
    """Raised for malformed, missing or out-of-range input."""


class NotFoundError(BoardError):
    """Raised when a referenced message does not exist."""


class AuthorizationError(BoardError):
    """Raised when the requester does not own the message being changed."""


class StorageError(BoardError):
    """Raised when the underlying database operation fails.

    The original driver exception is chained as ``__cause__``.
    """
