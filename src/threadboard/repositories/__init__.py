"""Data access layer."""

from .message_repo import MessageRepository

__all__ = ["MessageRepository"]
