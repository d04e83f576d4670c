"""Message-related Pydantic schemas."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class MessageCreate(BaseModel):
    """Schema for creating a post or a reply."""

    content: str = Field(..., description="Message text; trimmed before length checks")
    parent_id: str | None = Field(None, description="Parent message ID for replies")


class MessageUpdate(BaseModel):
    """Schema for editing a message's content."""

    content: str = Field(..., description="Replacement text")


class MessageResponse(BaseModel):
    """Schema for message information returned by the API."""

    id: str
    content: str
    author_id: str
    parent_id: str | None
    like_voters: list[str]
    dislike_voters: list[str]
    like_count: int
    dislike_count: int
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _extract_attributes(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted
        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; every stored timestamp is UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    model_config = ConfigDict(from_attributes=True)


class MessagePage(BaseModel):
    """A page of top-level messages."""

    items: list[MessageResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class ThreadPathResponse(BaseModel):
    """Ancestors of a message, topmost first, ending with the message itself."""

    root_id: str | None
    orphaned: bool
    truncated: bool = False
    messages: list[MessageResponse]
