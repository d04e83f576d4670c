"""Business logic services for the Threadboard application."""

from .errors import (
    AuthorizationError,
    BoardError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .message_service import MessageService, RootPage, ThreadPath
from .voting import VoteType, VotingService

__all__ = [
    "MessageService", "RootPage", "ThreadPath",
    "VotingService", "VoteType",
    "BoardError", "ValidationError", "NotFoundError", "AuthorizationError", "StorageError",
]
