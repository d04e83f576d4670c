"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import Acknowledgement, CountResponse, SortDirection, SortField
from .message import (
    MessageCreate,
    MessagePage,
    MessageResponse,
    MessageUpdate,
    ThreadPathResponse,
)
from .vote import MyVoteResponse, VoteCreate

__all__ = [
    "Acknowledgement", "CountResponse", "SortDirection", "SortField",
    "MessageCreate", "MessagePage", "MessageResponse", "MessageUpdate", "ThreadPathResponse",
    "MyVoteResponse", "VoteCreate",
]
