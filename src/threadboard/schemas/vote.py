"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting or toggling a vote."""

    vote_type: Literal["like", "dislike"] = Field(
        ...,
        description="Repeat the same choice to clear it; pick the other to switch",
    )


class MyVoteResponse(BaseModel):
    """The caller's current vote on a message."""

    vote_type: Literal["like", "dislike"] | None = None
