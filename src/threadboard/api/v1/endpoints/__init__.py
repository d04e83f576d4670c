"""API endpoint modules for version 1."""

from .messages import router as messages_router
from .votes import router as votes_router

__all__ = [
    "messages_router",
    "votes_router",
]
