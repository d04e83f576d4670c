"""Shared Pydantic schemas and enums for list endpoints."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SortField(str, Enum):
    """Message attributes that listings may be ordered by."""

    CREATED_AT = "created_at"
    LIKE_COUNT = "like_count"
    DISLIKE_COUNT = "dislike_count"


class SortDirection(str, Enum):
    """Listing order."""

    ASC = "asc"
    DESC = "desc"


class Acknowledgement(BaseModel):
    """Plain status response for operations without a body."""

    status: str = Field("success", description="Outcome of the operation.")
    detail: str | None = None


class CountResponse(BaseModel):
    """Single integer count."""

    count: int = Field(..., ge=0)
