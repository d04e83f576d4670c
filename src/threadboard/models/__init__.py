"""SQLAlchemy models for the Threadboard application."""

from .message import Message
from .vote import VOTE_DISLIKE, VOTE_LIKE, MessageVote

__all__ = [
    "Message",
    "MessageVote",
    "VOTE_LIKE", "VOTE_DISLIKE",
]
